"""
Web front end for the scheduler simulator
"""
