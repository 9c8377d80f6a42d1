"""
Model responses used across the test suite.
"""


def classification(incident_type, confidence=0.9, reasoning="It matches the description."):
    return {"type": incident_type, "confidence": confidence, "reasoning": reasoning}


def extraction(fields, message="Could you tell me more?", done=False):
    return {"extractedFields": fields, "message": message, "allFieldsCollected": done}


def emergency_extraction(fields, message="Where exactly are you?", has_location=False):
    return {"extractedFields": fields, "message": message, "hasLocation": has_location}


def summary(text="On Monday a colleague repeatedly insulted the reporter in the office."):
    return {"summary": text}


HUMAN_FIELDS = {
    "who": "my colleague John",
    "what": "repeated insults",
    "when": "Monday morning",
    "where": "open-plan office",
}

FENCED_CLASSIFICATION = """Sure! Here is the classification:
```json
{
  "type": "FACILITY",
  "confidence": 0.8,
  "reasoning": "A broken door is a building problem."
}
```
Let me know if you need anything else."""
