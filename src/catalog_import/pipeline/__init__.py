# Pipeline module for catalog import analysis
"""
Batch pipeline merging the nightly import logs.

Scripts (in execution order):
    01_load_logs: Load the time log and the import statistics log
    02_dedup_imports: Keep the max-total row per repeated date
    03_merge_logs: Full outer join on the date key
    04_add_calendar: Add weekday, month and year
    05_export_table: Write the merged table as TSV
    06_rank_features: Random-forest variable importance for durations
"""
