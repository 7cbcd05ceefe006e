"""
The `checklist` sub-package drives the interactive review: loading checklist
templates, walking the reviewer through them and writing the final report.
"""
