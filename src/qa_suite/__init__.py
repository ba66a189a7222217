"""
qa_suite: HTTP and browser helpers for the reqres.in / Wikipedia end-to-end suite.
"""

__version__ = "0.1.0"
