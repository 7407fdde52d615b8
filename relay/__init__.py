"""
relay - workspace target runner with an end-to-end test pipeline.
"""
