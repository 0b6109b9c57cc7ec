INSIGHT_SYSTEM_PROMPT = "You are a Sales Intelligence AI that scores leads and answers only in JSON."

INSIGHT_PROMPT = (
    "Act as a Sales Intelligence AI. Analyze this lead: {contact_json}. "
    "Return a JSON object with two fields: leadScore (0-100) and insight "
    "(a 1-sentence sales tip based on their job title). "
    "Ensure the response is valid JSON."
)
