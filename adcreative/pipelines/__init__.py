"""
Pipelines - multi-step creative production flows.
"""
