"""Enumerations shared by the simulation, scoring, and recommendation layers."""
