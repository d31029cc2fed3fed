"""Recommended labels offered by entry forms; aggregation never enforces them"""

REVENUE_CATEGORIES = [
    "Sales Revenue",
    "Service Revenue",
    "Product Sales",
    "Consulting",
    "Licensing",
    "Interest Income",
    "Other Revenue",
]

EXPENSE_CATEGORIES = [
    "Office Supplies",
    "Marketing",
    "Travel",
    "Software/Tools",
    "Rent",
    "Utilities",
    "Insurance",
    "Professional Services",
    "Equipment",
    "Other Expenses",
]

INFLOW_SOURCES = [
    "Customer Payments",
    "Investment Income",
    "Loan Proceeds",
    "Asset Sales",
    "Government Grants",
    "Other Inflows",
]

OUTFLOW_SOURCES = [
    "Supplier Payments",
    "Payroll",
    "Loan Payments",
    "Tax Payments",
    "Equipment Purchase",
    "Rent/Utilities",
    "Other Outflows",
]
