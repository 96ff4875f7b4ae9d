"""
Scheduling core: scoring, greedy placement and result validation
"""
