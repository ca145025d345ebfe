"""
Place catalog.

Responsibilities:
- Load the destination catalog into memory once per process.
- Answer name, location, tag and popularity lookups against it.
- Order results by distance from a reference coordinate when one is given.
"""
