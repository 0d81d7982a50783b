"""
Skin-consultation intake forms: local snapshot, Supabase sync, export.

The record/sync layers do not depend on the console connector, so they can be
reused behind another UI shell.
"""
