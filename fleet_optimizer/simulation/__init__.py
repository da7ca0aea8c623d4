"""
Synthetic fleet generation.

Modules
-------
profiles  : FleetProfile lookup table (prefixes, table count, utilization
            distribution per industry profile) + resolve_profile().
scoring   : compute_monthly_spend() + compute_waste_score() +
            compute_savings_potential(): pure cost model, no randomness.
generator : generate_table() + generate_fleet(): draws table attributes from
            an injected RandomSource and scores them.
"""
