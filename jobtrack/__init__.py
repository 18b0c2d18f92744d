# JobTrack - Job Application Tracker
"""
JobTrack - A small job application tracker.

Record applications, move them through the hiring pipeline, and analyze
job descriptions for the skills worth highlighting on a resume.
"""

__version__ = "1.0.0"
__author__ = "JobTrack"
__description__ = "Job application tracker with AI job description analysis"
