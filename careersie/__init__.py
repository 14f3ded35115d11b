"""
Careersie - career profile matching core

Turns job postings into structured requirements and scores candidate
profiles against them.

Architecture:
- Intake Context: Job description extraction into ParsedJobData
- Targeting Context: Relevance scoring, experience ordering, skill gaps
"""

__version__ = "0.1.0"
