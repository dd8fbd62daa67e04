"""
Utility functions module.

Calendar arithmetic shared by the pricing layer:
- Quarterly expirations fall on the third Friday of Mar/Jun/Sep/Dec
- Days-to-expiration is rounded up and never drops below one day
"""
