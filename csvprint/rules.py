"""
Deterministic print-set rules.

Header keywords, filter delimiters and titles live here so the renderer
stays free of magic strings.
"""

NAME_KEYWORDS = ("name", "applicant")
COMPANY_KEYWORDS = ("company", "organization", "employer")

ROW_FILTER_DELIMITERS = (",", "\n", "\r")

FALLBACK_TITLE = "Application {position}"
DEFAULT_DOCUMENT_TITLE = "Print Set"

CSV_EXTENSION = ".csv"
CSV_CONTENT_TYPES = ("text/csv",)
