from enum import Enum


class Category(str, Enum):
    # Aggregation order: TLR, RP, GO, OI, PR
    TLR = "tlr"                  # Teaching, Learning & Resources
    RESEARCH = "research"        # Research & Professional Practice
    GRADUATION = "graduation"    # Graduation Outcomes
    OUTREACH = "outreach"        # Outreach & Inclusivity
    PERCEPTION = "perception"    # Peer / employer / public perception


DETAILED_CATEGORIES = (Category.TLR, Category.RESEARCH)
