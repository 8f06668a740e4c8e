"""
Calendar scheduling service: personal meeting calendars with conflict
detection, and projection of organizational events into them.
"""
