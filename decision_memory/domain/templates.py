"""Starter templates for the decision authoring form.

A chosen template pre-fills the form instead of any autosaved draft.
"""

from dataclasses import dataclass

from decision_memory.schemas.decisions import Alternative, Category, DecisionDraft

BLANK_TEMPLATE_ID = "blank"


@dataclass(frozen=True)
class DecisionTemplate:
    id: str
    name: str
    description: str
    prefill: DecisionDraft


DECISION_TEMPLATES: dict[str, DecisionTemplate] = {
    "tech-stack": DecisionTemplate(
        id="tech-stack",
        name="Tech Stack Change",
        description="Switching databases, frameworks, or infrastructure",
        prefill=DecisionDraft(
            title="Migrating from [Current Tech] to [New Tech]",
            category=Category.TECH,
            decision="We are switching from [current technology] to [new technology] to address [specific pain points].",
            context=(
                "Current system limitations:\n- [Scalability issue]\n- [Performance bottleneck]\n"
                "- [Maintenance cost]\n\nThis change is triggered by [growth milestone / incident / requirement]."
            ),
            alternatives=[
                Alternative(
                    name="Stay with current solution",
                    why_rejected="Does not address the core scalability concerns we're facing.",
                ),
                Alternative(
                    name="Build custom in-house solution",
                    why_rejected="Engineering time better spent on product features.",
                ),
            ],
            assumptions=[
                "The migration can be completed in [X weeks] without major production incidents.",
                "The new solution will handle [X]x current load.",
            ],
            success_criteria=[
                "Zero data loss during migration",
                "Response times under [X]ms at peak load",
                "Maintenance time reduced by [X]%",
            ],
        ),
    ),
    "hiring": DecisionTemplate(
        id="hiring",
        name="Hiring Decision",
        description="Selecting a candidate or defining a new role",
        prefill=DecisionDraft(
            title="Hiring [Role Title] for [Team/Department]",
            category=Category.HIRING,
            decision="We are hiring [candidate name/type] for [role] to [primary purpose of the hire].",
            context=(
                "Team context:\n- Current team size: [X]\n- Workload issues: [specific gaps]\n"
                "- Growth plans: [upcoming needs]\n\nThis role is critical because [reason]."
            ),
            alternatives=[
                Alternative(
                    name="Promote internally",
                    why_rejected="No suitable internal candidates with required skillset.",
                ),
                Alternative(
                    name="Outsource to contractor",
                    why_rejected="This role requires deep institutional knowledge.",
                ),
                Alternative(name="Delay hiring", why_rejected="Current workload is unsustainable."),
            ],
            assumptions=[
                "Candidate will ramp up within [X] weeks.",
                "Team dynamics will not be negatively impacted.",
            ],
            success_criteria=[
                "Candidate passes 90-day review with positive feedback",
                "Team velocity increases by [X]% within 3 months",
            ],
        ),
    ),
    "pricing": DecisionTemplate(
        id="pricing",
        name="Pricing Change",
        description="Adjusting pricing strategy or plans",
        prefill=DecisionDraft(
            title="Adjusting Pricing from [Old] to [New]",
            category=Category.STRATEGIC,
            decision="We are changing our pricing from [current structure] to [new structure] to [primary goal].",
            context=(
                "Market context:\n- Competitor pricing: [range]\n- Customer feedback: [themes]\n"
                "- Current conversion rate: [X]%"
            ),
            alternatives=[
                Alternative(
                    name="Keep current pricing",
                    why_rejected="Not capturing the value we deliver to customers.",
                ),
                Alternative(
                    name="Add more tiers",
                    why_rejected="Complexity would confuse customers and hurt conversions.",
                ),
            ],
            assumptions=[
                "Existing customers will accept grandfather clause terms.",
                "Price elasticity is within acceptable bounds.",
            ],
            success_criteria=[
                "ARPU increases by [X]% within 6 months",
                "Churn remains under [X]%",
            ],
        ),
    ),
    "product-launch": DecisionTemplate(
        id="product-launch",
        name="Product/Feature Launch",
        description="Launching a new product or major feature",
        prefill=DecisionDraft(
            title="Launching [Feature/Product Name]",
            category=Category.PRODUCT,
            decision="We are launching [feature/product] to [target user segment] to address [core problem].",
            context=(
                "Why now:\n- [Market timing]\n- [Customer demand signals]\n- [Competitive pressure]\n\n"
                "Scope: [MVP features included]"
            ),
            alternatives=[
                Alternative(
                    name="Wait for more validation",
                    why_rejected="Multiple customers have requested this feature explicitly.",
                ),
                Alternative(
                    name="Build a different feature first",
                    why_rejected="This has higher potential impact on retention.",
                ),
            ],
            assumptions=[
                "Target users will discover and adopt the feature within [X] weeks.",
                "The feature will not significantly increase support load.",
            ],
            success_criteria=[
                "[X]% of target users try the feature within first month",
                "Feature contributes to [X]% reduction in churn",
            ],
        ),
    ),
    BLANK_TEMPLATE_ID: DecisionTemplate(
        id=BLANK_TEMPLATE_ID,
        name="Start from Scratch",
        description="Create a decision with no template",
        prefill=DecisionDraft(
            category=Category.OTHER,
            alternatives=[Alternative(name="", why_rejected="")],
            assumptions=[""],
            success_criteria=[""],
        ),
    ),
}


def get_template(template_id: str) -> DecisionDraft:
    """Return a deep copy of a template's prefill.

    Raises:
        ValueError: If template_id is unknown
    """
    if template_id not in DECISION_TEMPLATES:
        raise ValueError(f"Unknown template: {template_id}. Valid templates: {sorted(DECISION_TEMPLATES)}")

    return DECISION_TEMPLATES[template_id].prefill.model_copy(deep=True)
