"""
Placement Hub - campus placement portal backend.

Students apply to recruiter job postings with a frozen snapshot of their
profile; both sides share a forum, direct messages and connections.
"""

__version__ = "1.0.0"
