"""
Clarvoy Decision Service

Group decision-making backend: blind judgments, judgment noise analysis,
debate comments, attachments, AI coaching prompts and an audit trail.
"""

__version__ = "0.1.0"
__author__ = "Clarvoy Team"
