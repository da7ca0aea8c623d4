"""
fleet_optimizer.reporting — display formatting and flat-file export.

Modules:
  formatters — currency / category helpers and ASCII tables for Typer CLI
               commands.
  export     — CSV/JSON export of a generated fleet and its recommendations.
"""
