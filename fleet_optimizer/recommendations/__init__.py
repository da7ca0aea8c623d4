"""
Recommendation engine: converts scored tables into prioritized, explained
optimization actions.

Modules
-------
engine : evaluate_actions() + select_primary_action() +
         build_recommendation() + generate_recommendations(): pure
         functions, no I/O.
"""
