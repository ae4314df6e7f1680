"""
Compliance Pack - Sample exchange.

A fully populated answer used to demo the response layout before any
query has been sent.
"""

from coprocessor.schemas.compliance import (
    Analysis,
    ChecklistItem,
    Citation,
    ComplianceResponse,
    CrossReference,
    RiskItem,
)


SAMPLE_QUERY = "What are the data principal rights under DPDP Act?"
SAMPLE_MODE_ID = "general"

SAMPLE_RESPONSE = ComplianceResponse(
    summary=(
        "The Digital Personal Data Protection (DPDP) Act, 2023 establishes comprehensive "
        "rights for data principals (individuals whose data is being processed). These "
        "rights form the backbone of the Act and are designed to give individuals "
        "meaningful control over their personal data."
    ),
    query_type="General Q&A",
    citations=[
        Citation(
            framework="DPDP Act 2023",
            section="Section 11",
            excerpt=(
                "Every Data Principal shall have the right to obtain from the Data Fiduciary "
                "confirmation of processing, a summary of personal data being processed, and "
                "the identities of all other Data Fiduciaries with whom the personal data has "
                "been shared."
            ),
            relevance="Direct statutory provision for right to information",
        ),
        Citation(
            framework="DPDP Act 2023",
            section="Section 12",
            excerpt=(
                "The Data Principal shall have the right to correction, completion, updating "
                "of inaccurate or misleading personal data, and erasure of personal data that "
                "is no longer necessary for the purpose for which it was processed."
            ),
            relevance="Core correction and erasure rights",
        ),
        Citation(
            framework="ISO 27701",
            section="Annex A.7.3",
            excerpt=(
                "The organization should provide a mechanism for data subjects to access, "
                "correct, and erase their personal information."
            ),
            relevance="International standard alignment with DPDP rights",
        ),
    ],
    analysis=Analysis(
        detailed_explanation=(
            "The DPDP Act provides six fundamental rights to Data Principals:\n\n"
            "**1. Right to Access Information (Section 11)** - Data Principals can request "
            "confirmation of whether their data is being processed, obtain a summary of their "
            "data, and know which entities it has been shared with.\n\n"
            "**2. Right to Correction and Erasure (Section 12)** - Individuals can demand "
            "correction of inaccurate data, completion of incomplete data, updating of outdated "
            "data, and erasure of data no longer needed.\n\n"
            "**3. Right to Grievance Redressal (Section 13)** - Data Fiduciaries must have a "
            "grievance mechanism and respond within prescribed timelines.\n\n"
            "**4. Right to Nominate (Section 14)** - Data Principals can nominate another "
            "individual to exercise their rights in case of death or incapacity.\n\n"
            "**5. Right against Automated Decision-Making** - Protection against decisions made "
            "solely by automated systems that significantly affect individuals.\n\n"
            "**6. Right to Withdraw Consent** - Data Principals may withdraw consent at any "
            "time, and the Data Fiduciary must cease processing within a reasonable period."
        ),
        cross_references=[
            CrossReference(
                framework_a="DPDP Act 2023",
                framework_b="GDPR",
                overlap=(
                    "Both provide rights to access, rectification, erasure, and data "
                    "portability. Both require consent as a lawful basis for processing."
                ),
                unique_to_a=(
                    "Right to nominate is unique to DPDP Act. Specific provisions for "
                    "children under 18."
                ),
                unique_to_b=(
                    "Right to data portability explicitly defined. Right to restrict "
                    "processing. Specific DPO requirements."
                ),
            ),
        ],
        risk_items=[
            RiskItem(
                risk="Non-compliance with data principal access requests within prescribed timeframe",
                severity="High",
                impact=(
                    "Penalties up to INR 200 crore per instance. Reputational damage and loss "
                    "of consumer trust."
                ),
                remediation=(
                    "Implement automated request tracking system with SLA monitoring. Train "
                    "staff on response procedures. Establish escalation protocols."
                ),
            ),
            RiskItem(
                risk="Inadequate grievance redressal mechanism",
                severity="Medium",
                impact=(
                    "Regulatory scrutiny, potential enforcement actions, and consumer "
                    "complaints to Data Protection Board."
                ),
                remediation=(
                    "Deploy dedicated grievance portal. Appoint Data Protection Officer. Create "
                    "standardized response templates and timelines."
                ),
            ),
        ],
        checklist_items=[
            ChecklistItem(item="Implement data subject access request (DSAR) portal", category="Technology", status="Required", priority="High"),
            ChecklistItem(item="Create privacy notice in clear, plain language", category="Documentation", status="Required", priority="High"),
            ChecklistItem(item="Establish grievance redressal mechanism", category="Process", status="Required", priority="High"),
            ChecklistItem(item="Implement consent management platform", category="Technology", status="Required", priority="Medium"),
            ChecklistItem(item="Train all data-handling staff on DPDP obligations", category="Training", status="Recommended", priority="Medium"),
        ],
    ),
    recommendations=[
        "Conduct a comprehensive data mapping exercise to identify all personal data processing activities and their legal basis under the DPDP Act.",
        "Implement a robust consent management platform that captures, stores, and manages consent with full audit trails.",
        "Establish clear internal SLAs for responding to data principal requests, well within the statutory timelines.",
        "Engage legal counsel to review existing privacy policies and update them to align with DPDP Act requirements.",
        "Set up regular compliance audits (quarterly) to ensure ongoing adherence to data principal rights obligations.",
    ],
)
