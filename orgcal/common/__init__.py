"""
Common utilities and configurations for OrgCal services.
"""
