"""
Test Suite for Waybill Sync

Test Structure:
- fixtures/: Fake collaborators and reply builders
- unit/: Unit tests mirroring src/ package structure
- integration/: End-to-end job scenarios and CLI tests

Test Data:
All recipients, phone numbers and tracking numbers are synthetic.
"""
