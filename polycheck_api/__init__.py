"""Polycheck HTTP grading service."""
