"""
Insurance Quote Comparison Backend.

A FastAPI service that reads insurance-quote PDFs, recognises the issuing
insurer with per-vendor text rules and stores the quoted price per tenant
for later comparison.
"""

__version__ = "1.0.0"
