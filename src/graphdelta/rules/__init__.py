"""Rules that categorize graph differences as breaking, non-breaking or ignored."""
