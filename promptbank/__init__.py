"""
promptbank — turn free-form prompt text into reusable templates.

Spans of text are marked as variables drawn from named option pools
("banks") grouped by category. The import wizard core compiles the marked
text into a ``{{bank_id}}`` template and reports the bank writes a storage
layer must apply; the FastAPI app hosts import sessions in memory.
"""
