"""
HTTP surface for the Meeting Optimizer
"""
