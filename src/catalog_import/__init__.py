# Catalog import log package
"""
Merging and analysis of the nightly catalog import logs.

Modules:
    - pipeline: Load, deduplicate, merge, enrich, export and rank
    - common: Schemas, duration parsing, configuration and errors
    - runner: In-process entry point chaining the pipeline stages
"""
