"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (today a single JSON file).
Services depend on the store interface (load/save/transaction) rather than touching the file.
"""
