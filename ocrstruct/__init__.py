"""OCR text structuring engine.

Turns raw OCR or PDF text into normalized, semantically labelled JSON for
invoices, bills, purchase orders, receipts, statements, and education
records, using layered line, table, and keyword heuristics.
"""

__version__ = "0.1.0"
