"""
Aggregation module for İş Takip.

Pure functions deriving financial figures (job cost and profit, personnel
balances, cash flow, cash register, timesheets and periodic reports) from
domain snapshots.
"""

from is_takip.aggregation.balances import (
    PersonnelStatement,
    job_balance,
    personnel_balance,
    personnel_balance_map,
    personnel_earning,
    personnel_statement,
)
from is_takip.aggregation.cash_flow import (
    CashFlowSummary,
    Transaction,
    monthly_cash_flow,
    monthly_finance_transactions,
    search_transactions,
)
from is_takip.aggregation.cash_register import (
    cash_register_transactions,
    filter_by_date_range,
    ledger_summary,
    register_totals,
    shared_expense_balances,
)
from is_takip.aggregation.job_costs import (
    CustomerAggregate,
    customer_aggregate,
    customer_jobs,
    job_cost,
    job_profit,
    jobs_by_location,
)
from is_takip.aggregation.periodic_report import (
    PeriodicReport,
    PeriodicReportBuilder,
    periodic_report,
)
from is_takip.aggregation.timesheet import (
    TimesheetRow,
    monthly_timesheet,
    monthly_wage_total,
)

__all__ = [
    "job_cost",
    "job_profit",
    "customer_aggregate",
    "customer_jobs",
    "jobs_by_location",
    "CustomerAggregate",
    "personnel_earning",
    "personnel_balance",
    "job_balance",
    "personnel_balance_map",
    "personnel_statement",
    "PersonnelStatement",
    "monthly_cash_flow",
    "monthly_finance_transactions",
    "search_transactions",
    "CashFlowSummary",
    "Transaction",
    "cash_register_transactions",
    "filter_by_date_range",
    "register_totals",
    "shared_expense_balances",
    "ledger_summary",
    "PeriodicReportBuilder",
    "PeriodicReport",
    "periodic_report",
    "monthly_timesheet",
    "monthly_wage_total",
    "TimesheetRow",
]
