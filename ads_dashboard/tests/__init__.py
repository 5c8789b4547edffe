'''
Ads Dashboard Backend Test Suite

Test Modules:
-------------
- test_metrics.py: Safe division, metric values, display strings and tooltips
- test_classification.py: Threshold statuses, DRR margin bands, overrides
- test_recommendation.py: Overall status rules and recommendation banner
- test_analytics.py: Filtering, grouping, sorting and daily/period reconciliation
- test_trends.py: Day-over-day trend arrows
- test_ingestion.py: Advertising report parsing and filter options
- test_services.py: Analysis cache, dataset registry and preferences stores
- test_api.py: HTTP endpoints via FastAPI TestClient
'''
