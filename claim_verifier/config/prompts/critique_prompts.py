"""Prompt template for the self-critique audit of a verdict."""

CRITIQUE_PROMPT = """You are a quality assurance agent validating fact-checking results.

**Original Claim:**
"{claim}"

**Verification Result:**
- Verdict: {verdict}
- Confidence: {confidence}
- Reasoning: {reasoning}
- Citations: {citations}

**Evidence Provided:**
{evidence}

**Your Task:**
Validate the verification result by checking for:

1. **Citation Validity:**
   - Are all citations properly referenced?
   - Do citation indices match actual evidence numbers?
   - Check for hallucinated sources (sources not in the evidence). Name the citation title in the issue description.

2. **Reasoning Quality:**
   - Is the reasoning coherent and logical?
   - Does it follow from the evidence provided?

3. **Verdict Support:**
   - Is the verdict ({verdict}) supported by the evidence?
   - Should it be NOT_ENOUGH_EVIDENCE instead?

4. **Confidence Calibration:**
   - Is the confidence score ({confidence}) appropriate?
   - Say "too high" (weak evidence but high confidence) or "too low" (strong evidence but low confidence) in the issue description.

5. **Hallucination Detection:**
   - Are any facts claimed without evidence?
   - Are quotes or numbers accurate?

**Issue types:** citation_missing, citation_invalid, reasoning_incoherent, confidence_miscalibrated, verdict_unsupported, hallucination, other

**Severity Levels:**
- critical: Makes the verdict unreliable (e.g., hallucinated sources, wrong verdict)
- major: Significantly impacts quality (e.g., confidence miscalibrated, weak reasoning)
- minor: Small issues that don't affect core validity

Provide a thorough critique."""

NO_CRITIQUE_EVIDENCE_TEXT = "No evidence provided"
