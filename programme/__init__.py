"""
Programme planner: rotation and assessment scheduling for multi-day clinical
training courses.

Given a subject's configuration (groups, workshops, stations, time slots,
durations) the planners deterministically decide which group is where in each
round, and which candidate plays which role at each assessment station.
"""

__version__ = "1.0.0"
