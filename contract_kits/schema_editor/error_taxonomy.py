"""
Schema Editor Error Taxonomy

Classify contract editing failures for the UI layer.

Every failure is reported through a return value (None, a status dict, or the
unchanged contract string); these codes travel in the status dicts and in the
structured log lines so the caller can surface a consistent message.
"""


class SchemaEditorErrorTaxonomy:
    """Map failure codes to severity and user-facing messages."""

    CATEGORIES = {
        'malformed_json': {
            'severity': 'high',
            'pattern': 'Contract string is not valid JSON',
            'user_message': 'The contract could not be read; check the JSON syntax',
        },
        'missing_contract': {
            'severity': 'high',
            'pattern': 'JSON document has no "Contract" object at the top level',
            'user_message': 'The document does not define a Contract model',
        },
        'invalid_schema': {
            'severity': 'high',
            'pattern': 'A schema keyword has the wrong JSON type (e.g. a non-string "$ref")',
            'user_message': 'The contract contains a property the editor cannot read',
        },
        'missing_name': {
            'severity': 'medium',
            'pattern': 'Added or renamed row has an empty name',
            'user_message': 'Every field needs a name',
        },
        'row_not_found': {
            'severity': 'medium',
            'pattern': 'Mutation target rowId is not present in the row tree',
            'user_message': 'The edited field no longer exists',
        },
        'path_not_found': {
            'severity': 'high',
            'pattern': 'Row tree path does not exist in the contract document',
            'user_message': 'The editor is out of sync with the stored contract; reload it',
        },
        'name_collision': {
            'severity': 'medium',
            'pattern': 'Rename would duplicate an existing sibling property name',
            'user_message': 'A field with that name already exists at this level',
        },
    }

    UNKNOWN = {
        'severity': 'unknown',
        'pattern': 'Unknown error category',
        'user_message': 'See logs for details',
    }

    @classmethod
    def classify(cls, error_code: str) -> dict:
        """Category info (code, severity, pattern, user_message) for a failure code."""
        return dict(cls.CATEGORIES.get(error_code, cls.UNKNOWN), code=error_code)

    @classmethod
    def all_categories(cls) -> list:
        return list(cls.CATEGORIES)

    @classmethod
    def severity_level(cls, error_code: str) -> str:
        return cls.classify(error_code)['severity']

    @classmethod
    def user_message(cls, error_code: str) -> str:
        return cls.classify(error_code)['user_message']
