# Catalog Import Analysis - nightly import log merging and duration analysis
"""
Analysis of the nightly library-catalog import jobs.

Modules:
    - common: Shared logging setup and base defaults
    - catalog_import: Loading, cleaning and merging of the time and
      import statistics logs, plus duration feature ranking
"""
