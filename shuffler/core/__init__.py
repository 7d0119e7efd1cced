"""
Core: interleaving generation, tasks, script loading and execution.
"""
