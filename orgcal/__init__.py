"""OrgCal: organization calendar and scheduling services."""
