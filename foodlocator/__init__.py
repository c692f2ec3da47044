"""Healthy Food Locator: geocode a place, find healthy food venues nearby, enrich them for a map."""
