# Contract Schema Editor Kit
# Map JSON-Schema contract documents onto an editable row tree and apply
# add / update / delete / rename edits back onto the contract string

from .parser import parse_contract_array, parse_contract_document, parse_schema
from .tree import (
    deep_copy,
    find_parent,
    find_row,
    find_row_in_tree_and_delete,
    find_row_in_tree_and_update,
    get_display_type,
    last,
    reorder_options,
    row_path,
)
from .mutations import (
    build_new_object,
    create_schema_string,
    format_reference_name,
    get_existing_options,
    update_contract_string,
)
from .display import contract_details
from .models import ModelOption, OptionValue, Row
from .case_insensitive import CaseInsensitiveDict
from .error_taxonomy import SchemaEditorErrorTaxonomy

__all__ = [
    'parse_contract_array', 'parse_contract_document', 'parse_schema',
    'deep_copy', 'find_parent', 'find_row', 'find_row_in_tree_and_delete',
    'find_row_in_tree_and_update', 'get_display_type', 'last', 'reorder_options', 'row_path',
    'build_new_object', 'create_schema_string', 'format_reference_name',
    'get_existing_options', 'update_contract_string',
    'contract_details',
    'ModelOption', 'OptionValue', 'Row',
    'CaseInsensitiveDict', 'SchemaEditorErrorTaxonomy',
]
__version__ = '1.0.0'
