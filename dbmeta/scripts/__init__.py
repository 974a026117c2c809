"""Script splitting and execution."""

from dbmeta.scripts.batch import KeywordBoundarySplitter, StatementSplitter, split_statements
from dbmeta.scripts.runner import (
    BuildPlan,
    classify_build_scripts,
    discover_scripts,
    load_script,
    run_script,
    run_script_files,
)

__all__ = [
    # Batching
    "KeywordBoundarySplitter",
    "StatementSplitter",
    "split_statements",
    # Running
    "BuildPlan",
    "classify_build_scripts",
    "discover_scripts",
    "load_script",
    "run_script",
    "run_script_files",
]
