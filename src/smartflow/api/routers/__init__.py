"""FastAPI routers for the SmartFlow API.

Each router handles a specific domain of endpoints:
- system: Health check, version info
- conditions: Evaluate, describe and validate condition specifications
- forms: Screen/field visibility and condition field pickers
"""
