"""Normalization of backend responses into ActivityItem objects."""
