"""
AI trade proposal system.

Need identification, target matching, offer construction, proposal
orchestration and the trade deadline lifecycle.
"""
