"""
Static content shared across styles.
"""

from __future__ import annotations


# Opens the conversation so the model delivers its greeting first.
GREETING_PROMPT = "Hello, I am ready for the interview. [Time: 0:00]"


FEEDBACK_MESSAGE = """
## Interview Performance Summary

### Strengths
- Demonstrated good communication skills
- Provided structured responses
- Showed engagement throughout the interview

### Areas for Improvement
- Could provide more specific examples
- Consider using the STAR method for behavioral questions
- Practice elaborating on technical concepts

### Technical Accuracy
- Responses were generally on track
- Some areas could benefit from deeper technical knowledge

### Communication
- Clear and articulate
- Good pace and tone

### Overall Assessment
**Recommendation**: Proceed to next round
**Confidence Score**: 7/10

*Note: This is placeholder feedback; no model call is made to produce it.*
""".strip()
