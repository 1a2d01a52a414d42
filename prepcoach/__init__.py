"""
PrepCoach - Adaptive Mock Interview Coach

Runs practice interviews whose difficulty and interviewer tone adapt to each
answer, and turns a user's answer history into performance analytics,
behavioral insights and coaching suggestions.
"""

__version__ = "0.1.0"
__author__ = "PrepCoach Team"
