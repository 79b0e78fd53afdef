"""
Remote service integrations for recordsync.
"""
