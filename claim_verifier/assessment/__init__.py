"""Evidence sufficiency assessment."""

from claim_verifier.assessment.sufficiency_assessor import EvidenceSufficiencyAssessor

__all__ = ["EvidenceSufficiencyAssessor"]
