# src/jolokia_api_server/__init__.py
