"""
Use Cases

Organized by domain folder:
- clients/: Single-client lifecycle (create, read, update, delete, restore,
  statistics, validation)
- batch/: Multi-client operations built on the client use cases

Import from the subdirectories.
"""
