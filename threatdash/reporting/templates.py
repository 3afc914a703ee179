"""Markdown templates for threat-intelligence and BCM reports."""

from __future__ import annotations

from datetime import datetime, timezone

from threatdash.models.report import ReportDomain, ReportFormat, TimeWindow
from threatdash.reporting.statistics import BCMStatistics, ThreatIntelStatistics

THREAT_INTEL_FOOTER = "*Generated by Threat Intelligence Dashboard*"
BCM_FOOTER = "*Generated by BCM Impact Analysis System*"

THREAT_INTEL_RECOMMENDATIONS: list[tuple[str, list[str]]] = [
    (
        "Immediate Actions",
        [
            "Block critical IOCs at network perimeter",
            "Enhance email security filters",
            "Update security awareness training",
        ],
    ),
    (
        "Medium-term Initiatives",
        [
            "Implement zero-trust architecture",
            "Upgrade SIEM correlation rules",
            "Conduct threat hunting exercises",
        ],
    ),
    (
        "Long-term Strategy",
        [
            "Expand threat intelligence feeds",
            "Develop custom detection rules",
            "Strengthen incident response capabilities",
        ],
    ),
]

BCM_RECOMMENDATIONS: list[tuple[str, list[str]]] = [
    (
        "Immediate Actions",
        [
            "Implement crisis communication plan",
            "Activate backup systems testing",
            "Review cyber insurance coverage",
        ],
    ),
    (
        "Strategic Initiatives",
        [
            "Develop sector-specific playbooks",
            "Enhance third-party risk management",
            "Invest in resilience technologies",
        ],
    ),
    (
        "Compliance & Governance",
        [
            "Update BCM policies",
            "Conduct board-level reporting",
            "Schedule quarterly reviews",
        ],
    ),
]


def format_generated_at(value: datetime) -> str:
    """Render a timestamp as ``10/19/2026, 7:05:09 PM`` in UTC.

    Aware values are converted to UTC so the header agrees with the filename
    date; naive values are taken as UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value.month}/{value.day}/{value.year}, {hour}:{value.minute:02d}:{value.second:02d} {meridiem}"


def format_usd(amount: float) -> str:
    """Render a dollar amount in the compact ``$2.1M`` / ``$450K`` style."""
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"${amount / 1_000:.0f}K"
    return f"${amount:.0f}"


def build_report_filename(domain: ReportDomain, report_format: ReportFormat, generated_at: datetime) -> str:
    """Return ``{domain}-{format}-report-YYYY-MM-DD.md``."""
    return f"{domain.value}-{report_format.value}-report-{generated_at.date().isoformat()}.md"


def _header(title: str, report_format: ReportFormat, window: TimeWindow, generated_at: datetime) -> list[str]:
    return [
        f"# {title}",
        "",
        f"**Report Type:** {report_format.value.upper()}",
        f"**Generated:** {format_generated_at(generated_at)}",
        f"**Time Range:** {window.value}",
        "",
    ]


def _format_recommendations(tiers: list[tuple[str, list[str]]]) -> list[str]:
    lines: list[str] = []
    for index, (heading, items) in enumerate(tiers, start=1):
        if index > 1:
            lines.append("")
        lines.append(f"{index}. **{heading}:**")
        lines.extend(f"   - {item}" for item in items)
    return lines


def render_threat_intelligence_report(
    report_format: ReportFormat,
    window: TimeWindow,
    generated_at: datetime,
    stats: ThreatIntelStatistics,
) -> str:
    """Render the threat-intelligence report.

    The format only changes the printed label; every format gets the same
    sections and figures.
    """
    malware = ", ".join(stats.observed_malware) or "none observed"
    lines = _header("Threat Intelligence Report", report_format, window, generated_at)
    lines.extend(
        [
            "## Executive Summary",
            "",
            f"Our threat intelligence analysis for the {window.value} period reveals:",
            "",
            f"- **Active Threats:** {stats.active_threats:,} currently monitored",
            f"- **IOCs Detected:** {stats.iocs_processed:,} indicators processed",
            f"- **Feed Status:** {stats.feeds_operational}/{stats.feeds_total} sources operational",
            f"- **Threat Level:** {stats.threat_score}/100 ({stats.threat_level})",
            "",
            "## Key Findings",
            "",
            "### Critical Threats",
            "- Advanced persistent threat (APT) activity detected",
            "- Increased phishing campaigns targeting finance sector",
            f"- New malware variants observed: {malware}",
            "",
            "### IOC Analysis",
            f"- {stats.critical_iocs} critical IOCs requiring immediate attention",
            f"- {stats.medium_iocs} medium-risk indicators under investigation",
            f"- {stats.low_iocs} low-risk indicators archived",
            "",
            "## Recommendations",
            "",
        ]
    )
    lines.extend(_format_recommendations(THREAT_INTEL_RECOMMENDATIONS))
    lines.extend(["", "## MITRE ATT&CK Mapping", ""])
    lines.extend(
        f"- **{row.technique_id}:** {row.name} ({row.incidents} incidents)" for row in stats.attack_techniques
    )
    lines.extend(["", "---", THREAT_INTEL_FOOTER])
    return "\n".join(lines)


def render_bcm_report(
    report_format: ReportFormat,
    window: TimeWindow,
    generated_at: datetime,
    stats: BCMStatistics,
) -> str:
    """Render the business-continuity impact report."""
    impact = stats.business_impact
    lines = _header("Business Continuity Management Report", report_format, window, generated_at)
    lines.extend(
        [
            "## Executive Summary",
            "",
            f"Our BCM impact analysis for the {window.value} period shows:",
            "",
            f"- **Total IOCs Analyzed:** {stats.total_iocs:,}",
            f"- **Critical Business Impact:** {stats.critical_incidents} incidents",
            f"- **Risk Score:** {stats.risk_score:.1f}/10 ({stats.risk_level})",
            f"- **Sectors Monitored:** {stats.sectors_monitored} active sectors",
            "",
            "## Risk Distribution",
        ]
    )
    for tier in stats.risk_tiers:
        lines.extend(["", f"### {tier.level} Risk ({tier.incidents} incidents)"])
        lines.extend(f"- {row.sector}: {row.incidents} incidents" for row in tier.sectors)

    lines.extend(["", "## Sector Analysis"])
    for sector in stats.sector_analysis:
        lines.extend(
            [
                "",
                f"### {sector.sector} Sector",
                f"- **Threats Detected:** {sector.threats_detected}",
                f"- **Impact Level:** {sector.impact_level}",
                f"- **Primary Concerns:** {', '.join(sector.primary_concerns)}",
                f"- **Recommendations:** {', '.join(sector.recommendations)}",
            ]
        )

    lines.extend(
        [
            "",
            "## Business Impact Assessment",
            "",
            "### Financial Impact",
            f"- Estimated potential losses: {format_usd(impact.potential_losses_usd)}",
            f"- Recovery costs: {format_usd(impact.recovery_costs_usd)}",
            f"- Regulatory fines risk: {format_usd(impact.regulatory_fines_usd)}",
            "",
            "### Operational Impact",
            f"- Service disruption risk: {impact.service_disruption_pct}%",
            f"- Customer impact potential: {impact.customer_impact}",
            f"- Reputation damage risk: {impact.reputation_risk}",
            "",
            "## Recommendations",
            "",
        ]
    )
    lines.extend(_format_recommendations(BCM_RECOMMENDATIONS))
    lines.extend(["", "---", BCM_FOOTER])
    return "\n".join(lines)
