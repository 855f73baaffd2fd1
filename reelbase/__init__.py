"""
reelbase: in-memory movie catalog with discovery queries and rule-based recommendations.
"""
