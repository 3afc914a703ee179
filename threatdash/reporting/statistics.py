"""Statistics sources for report templates."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, Field

from threatdash.models.report import TimeWindow


class AttackTechniqueCount(BaseModel):
    """Incident count mapped to a MITRE ATT&CK technique."""

    technique_id: str
    name: str
    incidents: int


class ThreatIntelStatistics(BaseModel):
    """Figures printed in the threat-intelligence report."""

    active_threats: int
    iocs_processed: int
    feeds_operational: int
    feeds_total: int
    threat_score: int
    threat_level: str
    critical_iocs: int
    medium_iocs: int
    low_iocs: int
    observed_malware: list[str] = Field(default_factory=list)
    attack_techniques: list[AttackTechniqueCount] = Field(default_factory=list)


class SectorIncidents(BaseModel):
    sector: str
    incidents: int


class RiskTier(BaseModel):
    """Incidents in one risk tier, broken down by sector."""

    level: str
    incidents: int
    sectors: list[SectorIncidents] = Field(default_factory=list)


class SectorAnalysis(BaseModel):
    sector: str
    threats_detected: int
    impact_level: str
    primary_concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class BusinessImpact(BaseModel):
    potential_losses_usd: float
    recovery_costs_usd: float
    regulatory_fines_usd: float
    service_disruption_pct: int
    customer_impact: str
    reputation_risk: str


class BCMStatistics(BaseModel):
    """Figures printed in the BCM impact report."""

    total_iocs: int
    critical_incidents: int
    risk_score: float
    risk_level: str
    sectors_monitored: int
    risk_tiers: list[RiskTier] = Field(default_factory=list)
    sector_analysis: list[SectorAnalysis] = Field(default_factory=list)
    business_impact: BusinessImpact


class StatisticsProvider(Protocol):
    """Source of the counts and scores a report template prints."""

    def threat_intelligence(self, window: TimeWindow) -> ThreatIntelStatistics: ...

    def bcm(self, window: TimeWindow) -> BCMStatistics: ...


class SampleStatisticsProvider:
    """Illustrative fixed figures; the window does not change any value."""

    def threat_intelligence(self, window: TimeWindow) -> ThreatIntelStatistics:
        del window
        return ThreatIntelStatistics(
            active_threats=39,
            iocs_processed=1446,
            feeds_operational=14,
            feeds_total=15,
            threat_score=94,
            threat_level="High",
            critical_iocs=15,
            medium_iocs=32,
            low_iocs=18,
            observed_malware=["TrickBot", "Emotet"],
            attack_techniques=[
                AttackTechniqueCount(technique_id="T1566.001", name="Spearphishing Attachment", incidents=15),
                AttackTechniqueCount(technique_id="T1486", name="Data Encrypted for Impact", incidents=12),
                AttackTechniqueCount(technique_id="T1027", name="Obfuscated Files or Information", incidents=8),
            ],
        )

    def bcm(self, window: TimeWindow) -> BCMStatistics:
        del window
        return BCMStatistics(
            total_iocs=1247,
            critical_incidents=23,
            risk_score=7.2,
            risk_level="High",
            sectors_monitored=8,
            risk_tiers=[
                RiskTier(
                    level="High",
                    incidents=15,
                    sectors=[
                        SectorIncidents(sector="Finance sector", incidents=8),
                        SectorIncidents(sector="Healthcare", incidents=4),
                        SectorIncidents(sector="Technology", incidents=3),
                    ],
                ),
                RiskTier(
                    level="Medium",
                    incidents=32,
                    sectors=[
                        SectorIncidents(sector="Manufacturing", incidents=12),
                        SectorIncidents(sector="Retail", incidents=10),
                        SectorIncidents(sector="Government", incidents=10),
                    ],
                ),
                RiskTier(
                    level="Low",
                    incidents=18,
                    sectors=[
                        SectorIncidents(sector="Education", incidents=9),
                        SectorIncidents(sector="Non-profit", incidents=9),
                    ],
                ),
            ],
            sector_analysis=[
                SectorAnalysis(
                    sector="Finance",
                    threats_detected=28,
                    impact_level="High",
                    primary_concerns=["Payment fraud", "data breaches"],
                    recommendations=["Enhanced monitoring", "PCI compliance review"],
                ),
                SectorAnalysis(
                    sector="Healthcare",
                    threats_detected=19,
                    impact_level="Medium",
                    primary_concerns=["HIPAA violations", "ransomware"],
                    recommendations=["Backup verification", "staff training"],
                ),
                SectorAnalysis(
                    sector="Technology",
                    threats_detected=22,
                    impact_level="High",
                    primary_concerns=["IP theft", "supply chain attacks"],
                    recommendations=["Code security review", "vendor assessment"],
                ),
            ],
            business_impact=BusinessImpact(
                potential_losses_usd=2_100_000,
                recovery_costs_usd=450_000,
                regulatory_fines_usd=300_000,
                service_disruption_pct=15,
                customer_impact="Medium",
                reputation_risk="High",
            ),
        )
