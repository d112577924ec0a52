"""
Test package for the Quote Pricing Server.

- unit: Calculators, configuration loader, tax resolver and service
- integration: Pricing API through FastAPI's TestClient
"""
