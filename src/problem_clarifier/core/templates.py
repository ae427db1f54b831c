"""
Template catalogue for the heuristic generator.

Each topic owns a BranchTemplate: prose fields as Variant pairs plus the
candidate pools for list fields. Empty pools are filled from the shared
defaults after assembly.
"""

from dataclasses import dataclass, field

from .topic_classifier import Topic


@dataclass(frozen=True)
class Variant:
    """A prose field with a standard text and an optional alternate."""
    standard: str
    variation: str | None = None

    def __add__(self, other: "Variant") -> "Variant":
        """Concatenate two variants pairwise (lead-in + body)."""
        if self.variation is None and other.variation is None:
            return Variant(self.standard + other.standard)
        return Variant(
            self.standard + other.standard,
            (self.variation or self.standard) + (other.variation or other.standard),
        )

    def texts(self) -> tuple[str, ...]:
        """All authored texts for this field."""
        if self.variation is None:
            return (self.standard,)
        return (self.standard, self.variation)


EMPTY = Variant("")


@dataclass(frozen=True)
class BranchTemplate:
    """Authored content for one topic."""
    topic: Topic
    problem_statement: Variant
    target_users: Variant
    solution_direction: Variant
    assumptions_risks: Variant
    technical_considerations: Variant
    problem_context: Variant = EMPTY
    user_pain_points: tuple[str, ...] = field(default_factory=tuple)
    key_features: tuple[str, ...] = field(default_factory=tuple)
    success_metrics: tuple[str, ...] = field(default_factory=tuple)
    next_steps: tuple[str, ...] = field(default_factory=tuple)


# Lead-ins shared by the non-productivity branches
STATEMENT_LEAD = Variant("The core issue is ", "At its heart, the problem is ")
USERS_LEAD = Variant("This affects ", "The primary group impacted includes ")
DIRECTION_LEAD = Variant("A potential approach would be ", "We can address this by ")
ASSUMPTIONS_LEAD = Variant("Key assumptions: ")


DEFAULT_NEXT_STEPS = (
    "Conduct user interviews to validate problem",
    "Build minimal prototype",
    "Test with 10-20 early users",
    "Iterate on core functionality",
    "Define clear success metrics",
)

DEFAULT_SUCCESS_METRICS = (
    "Achieve product-market fit indicators",
    "Users report significant time savings",
    "Organic growth through word-of-mouth",
    "High engagement with core features",
)


PRODUCTIVITY = BranchTemplate(
    topic=Topic.PRODUCTIVITY,
    problem_statement=Variant(
        "Users face significant challenges in maintaining consistent productivity levels due to an "
        "overwhelming ecosystem of fragmented tools, ambiguous task priorities, and the cognitive "
        "burden of constant context-switching. This lack of a unified, cohesive workflow system "
        "results in frequent missed deadlines, increased mental fatigue, and a pervasive sense of "
        "being \"busy\" without achieving meaningful progress on high-value objectives.",
        "Knowledge workers are currently besieged by an unmanageable volume of disconnected tools "
        "and incessant notifications, leading to a state of chronic \"attention fragmentation\". In "
        "this environment, meaningful deep work becomes nearly impossible to sustain as users are "
        "forced to endlessly toggle between platforms, resulting in a fractured workflow that "
        "drains mental energy and drastically reduces the quality of creative output.",
    ),
    problem_context=Variant(
        "In today's work environment, the average knowledge worker uses 9-10 different tools daily, "
        "switching between them up to 25 times per day. This fragmentation creates mental overhead, "
        "increases the likelihood of missing important tasks, and makes it difficult to understand "
        "true progress across projects.",
        "Recent studies show that it takes over 23 minutes to refocus after an interruption. With "
        "constant context switching between communication (Slack), management (Jira), and execution "
        "tools, workers are operating in a state of continuous partial attention, reducing output "
        "quality and increasing burnout.",
    ),
    target_users=Variant(
        "Knowledge workers, freelancers, and small team leads who juggle multiple projects and need "
        "better visibility into their workload.",
        "Remote-first teams, digital nomads, and agency professionals who handle high-velocity "
        "workstreams across differing timezones.",
    ),
    solution_direction=Variant(
        "A unified dashboard that aggregates tasks from multiple sources, uses intelligent "
        "prioritization to surface what matters most, and provides gentle time-boxing suggestions.",
        "An \"operating system for work\" that acts as a smart layer above existing tools, using AI "
        "to filter noise and present only the next most critical action item.",
    ),
    assumptions_risks=Variant(
        "Assumes users are willing to connect existing tools. Risk: May become yet another tool to "
        "check using up more time.",
        "Risk: Platform dependence. If an API changes, the aggregation breaks. Challenge: Changing "
        "heavily ingrained user habits around \"checking everything\".",
    ),
    technical_considerations=Variant(
        "Requires robust API integrations with multiple platforms, secure OAuth 2.0 auth, and "
        "efficient data syncing. Consider webhook-based updates vs polling."
    ),
    user_pain_points=(
        "Spending 15-20 minutes each morning just figuring out what to work on",
        "Missing deadlines because tasks are scattered across multiple tools",
        "Feeling overwhelmed by notification overload from different platforms",
        "Unable to quickly communicate progress to stakeholders",
        "Losing context when switching between different project management systems",
    ),
    key_features=(
        "One-click integration with popular tools (Asana, Trello, Jira, Linear)",
        "AI-powered priority scoring based on deadlines and dependencies",
        "Smart daily digest that surfaces the 3-5 most important tasks",
        "Time-boxing suggestions with calendar integration",
        "Progress visualization across all projects in one view",
        "Quick-capture inbox for new tasks that auto-routes to the right tool",
    ),
    success_metrics=(
        "Reduce time spent on task triage by 50%",
        "Increase on-time task completion rate by 30%",
        "Achieve 70%+ daily active usage within first month",
        "Net Promoter Score (NPS) of 40+",
        "Average of 3+ tool integrations per user",
    ),
    next_steps=(
        "Validate problem with 20-30 target users through interviews",
        "Build MVP with 2-3 core integrations (start with most popular tools)",
        "Create simple prioritization algorithm",
        "Design minimal UI focused on daily digest view",
        "Run 2-week beta with 50 users",
    ),
)


DATA_TIME = BranchTemplate(
    topic=Topic.DATA_TIME,
    problem_statement=STATEMENT_LEAD + Variant(
        "fragmented information that requires excessive time to find and synthesize. The current "
        "state involves data scattered across disparate systems with no single source of truth, "
        "forcing users to act as \"human middleware\" just to locate basic facts. This systemic "
        "inefficiency prevents quick decision-making, creates a culture of decision paralysis, and "
        "significantly increases the operational risk of acting on obsolete, incomplete, or "
        "entirely incorrect data points."
    ),
    problem_context=Variant(
        "Modern work environments generate vast amounts of data across disconnected systems. "
        "Users spend hours searching."
    ),
    target_users=USERS_LEAD + Variant(
        "busy professionals who need to make informed decisions quickly."
    ),
    solution_direction=DIRECTION_LEAD + Variant(
        "building a smart aggregation layer that pulls relevant data from multiple sources."
    ),
    assumptions_risks=ASSUMPTIONS_LEAD + Variant(
        "the relevant sources expose APIs or exports that can be indexed, and users will grant "
        "read access to them. Risk: stale or conflicting records across sources can erode trust "
        "in the aggregated view."
    ),
    technical_considerations=Variant(
        "Requires connectors for each data source, an incremental indexing pipeline, and a search "
        "layer with relevance ranking. Permissions from the source systems must be respected at "
        "query time."
    ),
    user_pain_points=(
        "Wasting hours searching across multiple platforms",
        "Making decisions with incomplete data",
        "Duplicating work because past insights are buried",
        "Missing important updates scattered across systems",
    ),
    key_features=(
        "Universal search across all connected data sources",
        "AI-powered relevance ranking",
        "Automatic tagging and categorization",
        "Smart suggestions based on search patterns",
        "Quick preview without leaving search interface",
    ),
)


ACCESS = BranchTemplate(
    topic=Topic.ACCESS,
    problem_statement=STATEMENT_LEAD + Variant(
        "a significant and exclusionary barrier to accessing resources or services that should be "
        "readily available. This friction is not merely a minor inconvenience but a systemic "
        "obstacle that actively filters out potential users based on arbitrary technical, "
        "geographical, or economic constraints. The result is a widening equity gap where the "
        "people who need the service most are the ones most effectively prevented from reaching it."
    ),
    target_users=USERS_LEAD + Variant(
        "people on low-end devices, unreliable connections, or in underserved regions who are "
        "currently shut out of the service."
    ),
    solution_direction=DIRECTION_LEAD + Variant(
        "lowering the technical and geographic entry barriers so the service works on any device "
        "and connection."
    ),
    assumptions_risks=ASSUMPTIONS_LEAD + Variant(
        "the barrier is technical rather than regulatory, and the excluded users can be reached "
        "through existing channels. Risk: supporting low-end environments increases maintenance "
        "cost."
    ),
    technical_considerations=Variant(
        "Prioritize lightweight pages, offline caching, and graceful degradation on slow networks. "
        "Test on low-end hardware and with assistive technologies."
    ),
    user_pain_points=(
        "Unable to access services due to technical requirements",
        "Excluded from opportunities due to geographical limitations",
        "Facing unnecessary complexity in authentication",
        "Missing out on benefits available to others",
    ),
    key_features=(
        "Progressive web app (PWA) for cross-platform access",
        "Offline-first architecture",
        "Simplified authentication",
        "Low-bandwidth mode",
        "Multi-language support",
    ),
)


COST = BranchTemplate(
    topic=Topic.COST,
    problem_statement=STATEMENT_LEAD + Variant(
        "prohibitive cost structures that effectively gatekeep valuable tools or services, "
        "preventing widespread adoption among the very demographics that would benefit most. This "
        "economic exclusion limits the solution's impact to a narrow slice of the market, those who "
        "can easily afford premium pricing, while leaving a vast majority of potential users "
        "(students, non-profits, small businesses) with inferior alternatives or, worse, no "
        "solution at all."
    ),
    target_users=USERS_LEAD + Variant(
        "students, non-profits, and small businesses who see the value but cannot justify "
        "premium pricing."
    ),
    solution_direction=DIRECTION_LEAD + Variant(
        "offering a pricing model that scales with usage, anchored by a genuinely useful free tier."
    ),
    assumptions_risks=ASSUMPTIONS_LEAD + Variant(
        "a meaningful share of free users will convert as their usage grows. Risk: a generous free "
        "tier can cannibalize paid plans and strain infrastructure budgets."
    ),
    technical_considerations=Variant(
        "Keep per-user infrastructure cost low through multi-tenant design and usage metering. "
        "Billing must support tiered plans and discounts."
    ),
    user_pain_points=(
        "Priced out of tools that would significantly improve productivity",
        "Forced to use inferior free alternatives",
        "Unable to justify costs despite clear value proposition",
        "Feeling excluded from communities built around premium tools",
    ),
    key_features=(
        "Robust free tier with core functionality",
        "Transparent pricing with clear value differentiation",
        "Educational/non-profit discounts",
        "Community edition with peer support",
        "Flexible upgrade paths based on usage",
    ),
)


GENERIC = BranchTemplate(
    topic=Topic.GENERIC,
    problem_statement=STATEMENT_LEAD + Variant(
        "a fundamental misalignment between the complex, evolving needs of the user and the limited "
        "capabilities provided by current market solutions. This gap drives users to rely on "
        "patchwork manual workarounds that are inherently inefficient, prone to error, and deeply "
        "frustrating, ultimately resulting in suboptimal outcomes that fail to capitalize on the "
        "true potential of their workflow.",
        "a persistent gap where existing tools fail to address the nuance of the user's actual "
        "daily reality, offering generic features rather than specific solutions. This forces users "
        "into a cycle of compromise, where they must adapt their behavior to fit the tool's "
        "limitations rather than having the tool empower their natural workflow, leading to "
        "sustained inefficiency and user dissatisfaction.",
    ),
    target_users=USERS_LEAD + Variant(
        "people who currently rely on manual workarounds because no existing tool fits their needs."
    ),
    solution_direction=DIRECTION_LEAD + Variant(
        "building a focused tool that solves the primary pain point well before expanding scope."
    ),
    assumptions_risks=ASSUMPTIONS_LEAD + Variant(
        "the problem is shared by enough people to sustain a product. Risk: the need may be too "
        "niche, or existing tools may close the gap first."
    ),
    technical_considerations=Variant(
        "Start with a simple, well-tested core and integrate with the tools users already rely on."
    ),
    user_pain_points=(
        "Current solutions don't fully address needs",
        "Forced to use inefficient workarounds",
        "Spending excessive time on simple tasks",
        "Frustrated by lack of suitable alternatives",
    ),
    key_features=(
        "Core functionality that solves the primary pain point",
        "Simple, intuitive interface",
        "Fast performance and reliable operation",
        "Easy integration with existing workflows",
    ),
)


TEMPLATES: dict[Topic, BranchTemplate] = {
    template.topic: template
    for template in (PRODUCTIVITY, DATA_TIME, ACCESS, COST, GENERIC)
}


def get_template(topic: Topic) -> BranchTemplate:
    """Get the authored template for a topic."""
    return TEMPLATES[topic]
