"""Rule-based roadmap generation.

The generator is a pure function of the user's profile, financial snapshot and
goals. Rules are evaluated in a fixed order (foundation, goals, advanced,
employment); each rule yields zero or more step drafts. The drafts are then
stably sorted by priority, truncated and numbered.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from finpath.schemas.financial import FinancialState
from finpath.schemas.goal import Goal, GoalType
from finpath.schemas.profile import EmploymentStatus, UserProfile
from finpath.schemas.roadmap import RoadmapStep, StepCategory

EXPENSE_RATIO = 0.7
MAX_STEPS = 6


@dataclass(frozen=True)
class _Context:
    profile: UserProfile
    state: FinancialState
    monthly_expenses: float
    two_month_target: float
    six_month_target: float
    emergency_fund: float
    clamp_progress: bool

    @property
    def asset_threshold(self) -> float:
        return self.monthly_expenses * 12

    @property
    def has_solid_emergency_fund(self) -> bool:
        return self.emergency_fund >= self.six_month_target


def _build_context(profile: UserProfile, state: FinancialState, clamp_progress: bool) -> _Context:
    monthly_expenses = float(profile.monthly_income or 0.0) * EXPENSE_RATIO
    return _Context(
        profile=profile,
        state=state,
        monthly_expenses=monthly_expenses,
        two_month_target=monthly_expenses * 2,
        six_month_target=monthly_expenses * 6,
        emergency_fund=float(state.cash_assets or 0.0),
        clamp_progress=clamp_progress,
    )


def percent_of(part: float, whole: float, clamp: bool = False) -> float:
    # A zero target (zero income) counts as 0% rather than NaN.
    if whole <= 0:
        return 0.0
    value = part / whole * 100
    if clamp:
        return min(max(value, 0.0), 100.0)
    return value


def _step(
    title: str,
    description: str,
    category: StepCategory,
    priority: int,
    reasoning: str,
    can_run_parallel: bool = False,
    target_amount: float = 0.0,
    current_progress: float = 0.0,
) -> Dict:
    return {
        "title": title,
        "description": description,
        "category": category,
        "priority": priority,
        "can_run_parallel": can_run_parallel,
        "target_amount": target_amount,
        "current_progress": current_progress,
        "reasoning": reasoning,
    }


def _foundation_steps(ctx: _Context) -> List[Dict]:
    steps: List[Dict] = []
    ef = ctx.emergency_fund
    if ef < ctx.two_month_target:
        steps.append(_step(
            "Build 2-Month Emergency Fund",
            f"Save ${ctx.two_month_target:.2f} as your financial safety net. This protects you from unexpected expenses.",
            StepCategory.FOUNDATION,
            1,
            "Emergency fund is the foundation of financial security",
            target_amount=ctx.two_month_target,
            current_progress=min(percent_of(ef, ctx.two_month_target), 100.0) if ef > 0 else 0.0,
        ))
    if ctx.state.has_high_interest_debt:
        steps.append(_step(
            "Eliminate High-Interest Debt",
            "Pay off credit cards and loans with interest rates above 10%. Use the avalanche method (highest interest first).",
            StepCategory.FOUNDATION,
            2,
            "High-interest debt costs more than investment returns",
            target_amount=ctx.state.total_liabilities,
        ))
    if ctx.two_month_target <= ef < ctx.six_month_target:
        steps.append(_step(
            "Expand Emergency Fund to 6 Months",
            f"Grow your safety net to ${ctx.six_month_target:.2f}. This provides robust protection.",
            StepCategory.FOUNDATION,
            3,
            "Larger emergency fund enables risk-taking in investing and business",
            can_run_parallel=True,
            target_amount=ctx.six_month_target,
            current_progress=percent_of(ef, ctx.six_month_target, clamp=ctx.clamp_progress),
        ))
    return steps


def _emergency_fund_goal(ctx: _Context) -> List[Dict]:
    # Anything short of six months is already covered by the foundation layer.
    if not ctx.has_solid_emergency_fund:
        return []
    return [_step(
        "Emergency Fund Complete ✓",
        "Your emergency fund goal is achieved. Maintain this buffer.",
        StepCategory.FOUNDATION,
        5,
        "Goal accomplished",
        can_run_parallel=True,
        target_amount=ctx.six_month_target,
        current_progress=100.0,
    )]


def _start_investing_goal(ctx: _Context) -> List[Dict]:
    if ctx.emergency_fund >= ctx.two_month_target and not ctx.state.has_high_interest_debt:
        return [_step(
            "Start Investing in Index Funds",
            "Begin with 10-15% of monthly income in low-cost index funds. Start with $100-500/month.",
            StepCategory.WEALTH_BUILDING,
            2,
            "Time in the market beats timing the market",
            can_run_parallel=True,
            current_progress=50.0 if ctx.state.investment_assets > 0 else 0.0,
        )]
    return [_step(
        "Prepare Foundation for Investing",
        "Complete emergency fund and eliminate high-interest debt before investing.",
        StepCategory.PREPARATION,
        4,
        "Foundation must be solid before building wealth",
    )]


def _start_business_goal(ctx: _Context) -> List[Dict]:
    if ctx.profile.employment_status != EmploymentStatus.ENTREPRENEUR:
        return [_step(
            "Launch Side Hustle",
            "Start a side business alongside your employment. Begin with low-cost, skill-based ventures.",
            StepCategory.WEALTH_BUILDING,
            3,
            "Diversify income sources and build entrepreneurial skills",
            can_run_parallel=True,
        )]
    steps = [_step(
        "Invest in Business Growth",
        "Allocate resources to scale your business. Focus on revenue-generating activities.",
        StepCategory.WEALTH_BUILDING,
        2,
        "Your business is your primary wealth vehicle",
        can_run_parallel=True,
        current_progress=40.0 if ctx.state.business_assets > 0 else 0.0,
    )]
    if not ctx.has_solid_emergency_fund:
        steps.append(_step(
            "Increase Emergency Fund (Business Risk)",
            "As an entrepreneur, maintain 6-12 months of expenses due to income variability.",
            StepCategory.FOUNDATION,
            2,
            "Business income is less stable than employment",
            can_run_parallel=True,
            target_amount=ctx.six_month_target,
            current_progress=percent_of(ctx.emergency_fund, ctx.six_month_target, clamp=ctx.clamp_progress),
        ))
    return steps


def _passive_income_goal(ctx: _Context) -> List[Dict]:
    threshold = ctx.asset_threshold
    if ctx.state.total_assets >= threshold:
        return [_step(
            "Build Passive Income Streams",
            "Invest in dividend stocks, rental properties, or digital products that generate income.",
            StepCategory.ADVANCED,
            3,
            "Sufficient asset base to generate meaningful passive income",
            can_run_parallel=True,
            current_progress=20.0,
        )]
    return [_step(
        "Build Asset Base for Passive Income",
        f"Accumulate ${threshold:.2f} in assets before focusing on passive income.",
        StepCategory.PREPARATION,
        4,
        "Need sufficient capital to generate meaningful passive income",
        can_run_parallel=True,
        target_amount=threshold,
        current_progress=percent_of(ctx.state.total_assets, threshold, clamp=ctx.clamp_progress),
    )]


def _retire_early_goal(ctx: _Context) -> List[Dict]:
    return [_step(
        "Aggressive Retirement Investing",
        "Target 30-50% savings rate. Max out retirement accounts and invest in index funds.",
        StepCategory.WEALTH_BUILDING,
        2,
        "Early retirement requires aggressive saving and investing",
        can_run_parallel=True,
    )]


def _debt_freedom_goal(ctx: _Context) -> List[Dict]:
    if ctx.state.total_liabilities <= 0:
        return []
    return [_step(
        "Execute Debt Payoff Strategy",
        "Use avalanche method: pay minimum on all debts, extra payments to highest interest rate.",
        StepCategory.FOUNDATION,
        2,
        "Debt freedom provides financial flexibility and peace of mind",
        target_amount=ctx.state.total_liabilities,
    )]


GOAL_RULES: Dict[GoalType, Callable[[_Context], List[Dict]]] = {
    GoalType.EMERGENCY_FUND: _emergency_fund_goal,
    GoalType.START_INVESTING: _start_investing_goal,
    GoalType.START_BUSINESS: _start_business_goal,
    GoalType.PASSIVE_INCOME: _passive_income_goal,
    GoalType.RETIRE_EARLY: _retire_early_goal,
    GoalType.DEBT_FREEDOM: _debt_freedom_goal,
}


def _goal_steps(ctx: _Context, goals: Sequence[Goal]) -> List[Dict]:
    steps: List[Dict] = []
    for goal in sorted(goals, key=lambda g: g.priority):
        steps.extend(GOAL_RULES[GoalType(goal.goal_type)](ctx))
    return steps


def _advanced_steps(ctx: _Context) -> List[Dict]:
    if (
        ctx.has_solid_emergency_fund
        and not ctx.state.has_high_interest_debt
        and ctx.state.total_assets > ctx.asset_threshold
    ):
        return [_step(
            "Diversify Investments",
            "Explore real estate, bonds, or alternative investments. Don't put all eggs in one basket.",
            StepCategory.ADVANCED,
            5,
            "Diversification reduces risk and maximizes returns",
            can_run_parallel=True,
        )]
    return []


def _employment_steps(ctx: _Context) -> List[Dict]:
    if ctx.profile.employment_status == EmploymentStatus.STUDENT:
        return [_step(
            "Invest in Skills & Education",
            "Your biggest asset is your earning potential. Focus on high-value skills.",
            StepCategory.FOUNDATION,
            1,
            "Human capital is the foundation of wealth creation",
            can_run_parallel=True,
        )]
    return []


def candidate_steps(
    profile: UserProfile,
    state: FinancialState,
    goals: Sequence[Goal],
    clamp_progress: bool = False,
) -> List[Dict]:
    """Step drafts in emission order, before sorting and truncation."""
    ctx = _build_context(profile, state, clamp_progress)
    return (
        _foundation_steps(ctx)
        + _goal_steps(ctx, goals)
        + _advanced_steps(ctx)
        + _employment_steps(ctx)
    )


def finalize_steps(drafts: Sequence[Dict], max_steps: int = MAX_STEPS) -> List[RoadmapStep]:
    ordered = sorted(drafts, key=lambda d: d["priority"])[:max_steps]
    return [RoadmapStep(step_number=i, **draft) for i, draft in enumerate(ordered, start=1)]


def generate_roadmap(
    profile: UserProfile,
    state: FinancialState,
    goals: Sequence[Goal],
    max_steps: int = MAX_STEPS,
    clamp_progress: bool = False,
) -> List[RoadmapStep]:
    """Build the ordered roadmap for one user.

    ``goals`` must be non-empty; callers reject empty goal lists before calling.
    """
    drafts = candidate_steps(profile, state, goals, clamp_progress=clamp_progress)
    return finalize_steps(drafts, max_steps=max_steps)
