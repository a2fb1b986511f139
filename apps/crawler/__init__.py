"""
Crawler App - App Store / Play Store review collection

Responsibilities:
- Load target applications from target_apps.json
- Walk each application's paginated review feed (fixed page bound per store)
- Extract review records from every page with a streaming parser
- Write one CSV per application: output/<platform>/<app_id>.csv

Output columns:
- date, star, like, dislike, title, review
"""
