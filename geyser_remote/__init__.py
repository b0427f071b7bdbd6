"""Geyser Remote: control panel and schedule sync for the geyser controller."""
