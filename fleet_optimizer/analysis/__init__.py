"""Fleet-wide aggregation over generated tables."""
