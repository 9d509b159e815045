"""
Command Line Interface Package

Entry point for operating the waybill sync service.

Command Structure:
- waybill-sync version: Show version information
- waybill-sync config: Show the resolved configuration
- waybill-sync run: Run one reconciliation job (invoked by an external scheduler)
"""
