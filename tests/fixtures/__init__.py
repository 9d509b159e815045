"""
Test Fixtures and Utilities

Shared fakes for the collaborator messaging contract:
- FakeMessageClient records requests and answers from canned replies
- GatedMessageClient holds notifications until released
- Reply builders for the waybill, order and upload requests
"""
