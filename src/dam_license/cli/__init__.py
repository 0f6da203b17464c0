"""Command line interface of dam_license."""
