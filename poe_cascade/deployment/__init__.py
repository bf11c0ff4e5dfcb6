"""
deployment/ - HTTP front end for the chain calculator.

Import poe_cascade.deployment.api directly; it requires FastAPI.
"""
