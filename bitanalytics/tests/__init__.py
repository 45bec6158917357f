"""
BitAnalytics Test Suite

Test Modules:
- unit/test_redis_keys: Key scheme, event name validation, ISO week coordinates
- unit/test_redis_connection: URL resolution and availability checks
- unit/test_analytics: BitAnalytics entry point and end-to-end scenarios
- unit/event_engine/test_buckets: Mark, test, count, exists and delete
- unit/event_engine/test_event_recorder: Multi-granularity marking and cleanup
- unit/event_engine/test_bit_operations: AND/OR/XOR composition and nesting

Redis is replaced by fakeredis, so no server is needed.
"""
