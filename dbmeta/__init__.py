"""Firebird schema build, export and update tooling.

This package provides the catalog reader, DDL generator and script runner
behind the `dbmeta` command line tool.
"""

from dbmeta.operations import BuildResult, ExportResult, build_database, export_scripts, update_database

__all__ = [
    "BuildResult",
    "ExportResult",
    "build_database",
    "export_scripts",
    "update_database",
]
