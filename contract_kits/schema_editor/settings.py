"""
Settings for the schema editor kit.
Externalizes output formatting so hosts can tune it without code changes.
"""
import os
from typing import Optional


def _optional_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class EditorSettings:
    """Editor settings with environment variable support."""

    def __init__(self):
        # None keeps contract output compact (no whitespace between tokens)
        self.output_indent: Optional[int] = _optional_int(os.getenv("CONTRACT_OUTPUT_INDENT"))
        self.display_row_class: str = os.getenv("CONTRACT_DISPLAY_ROW_CLASS", "contract-display-row")
        self.new_model_label: str = os.getenv("CONTRACT_NEW_MODEL_LABEL", "Define a new model")


settings = EditorSettings()
