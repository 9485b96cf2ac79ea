"""
Mock analytics for the dashboard and reports screens.

These series are fixed demo figures, not computed from member data.
"""
from copy import deepcopy

DASHBOARD_STATS = [
    {"title": "Total Members", "value": "120", "trend": {"value": 8, "is_positive": True}},
    {"title": "Revenue", "value": "$8,250", "trend": {"value": 12, "is_positive": True}},
    {"title": "Active Subscriptions", "value": "105", "trend": {"value": 3, "is_positive": True}},
    {"title": "Pending Payments", "value": "5", "trend": {"value": 2, "is_positive": False}},
]

REVENUE_SERIES = [
    {"month": "Jan", "revenue": 5800},
    {"month": "Feb", "revenue": 6200},
    {"month": "Mar", "revenue": 6800},
    {"month": "Apr", "revenue": 7300},
    {"month": "May", "revenue": 7900},
    {"month": "Jun", "revenue": 8250},
]

REVENUE_ANALYSIS = [
    {"title": "Growth Rate", "value": "42.2%", "caption": "Yearly growth"},
    {"title": "Average Revenue", "value": "$7,042", "caption": "Per month"},
    {"title": "Revenue Forecast", "value": "$9,120", "caption": "Next month"},
]

SUBSCRIPTION_GROWTH = [
    {"month": "Jan", "monthly": 40, "quarterly": 30, "annual": 15, "total": 85},
    {"month": "Feb", "monthly": 45, "quarterly": 32, "annual": 18, "total": 95},
    {"month": "Mar", "monthly": 50, "quarterly": 32, "annual": 20, "total": 102},
    {"month": "Apr", "monthly": 48, "quarterly": 34, "annual": 21, "total": 103},
    {"month": "May", "monthly": 52, "quarterly": 35, "annual": 23, "total": 110},
    {"month": "Jun", "monthly": 55, "quarterly": 35, "annual": 25, "total": 115},
]

SUBSCRIPTION_DISTRIBUTION = [
    {"name": "Monthly", "value": 55, "color": "#9b87f5"},
    {"name": "Quarterly", "value": 35, "color": "#6930c3"},
    {"name": "Annual", "value": 25, "color": "#3a0ca3"},
]


def dashboard_summary() -> dict:
    return {"stats": deepcopy(DASHBOARD_STATS)}


def reports_summary() -> dict:
    return {
        "revenue": {
            "monthly": deepcopy(REVENUE_SERIES),
            "analysis": deepcopy(REVENUE_ANALYSIS),
        },
        "subscriptions": {
            "growth": deepcopy(SUBSCRIPTION_GROWTH),
            "distribution": deepcopy(SUBSCRIPTION_DISTRIBUTION),
        },
    }
