"""schemas.py
Declared output shapes sent verbatim with each generation request.

Written in the Gemini ``response_schema`` dialect so the service is constrained
to return JSON that deserializes into the models in ``core.models``.
"""

RESUME_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "contactInfo": {
            "type": "OBJECT",
            "properties": {
                "name": {"type": "STRING"},
                "phone": {"type": "STRING"},
                "email": {"type": "STRING"},
                "linkedin": {"type": "STRING"},
                "portfolio": {"type": "STRING"},
            },
            "required": ["name", "email"],
        },
        "summary": {"type": "STRING"},
        "workExperience": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "jobTitle": {"type": "STRING"},
                    "company": {"type": "STRING"},
                    "location": {"type": "STRING"},
                    "dates": {"type": "STRING"},
                    "responsibilities": {"type": "ARRAY", "items": {"type": "STRING"}},
                },
                "required": ["jobTitle", "company", "dates", "responsibilities"],
            },
        },
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "degree": {"type": "STRING"},
                    "institution": {"type": "STRING"},
                    "location": {"type": "STRING"},
                    "graduationDate": {"type": "STRING"},
                },
                "required": ["degree", "institution", "graduationDate"],
            },
        },
        "skills": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
    },
    "required": ["contactInfo", "summary", "workExperience", "education", "skills"],
}

ATS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "INTEGER", "description": "A score from 0 to 100."},
        "strengths": {"type": "STRING", "description": "A paragraph summarizing the resume's strengths."},
        "suggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "An array of actionable suggestions.",
        },
    },
    "required": ["score", "strengths", "suggestions"],
}
