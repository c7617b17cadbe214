"""Broken-link audit for the pathway pages of a single web portal."""
