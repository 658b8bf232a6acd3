"""
JobDeck - AI Prompt Templates

Fixed prompts for the two generation features. Both ask the model for a bare
JSON object; replies are still passed through fence stripping because models
often wrap JSON in markdown code blocks anyway.
"""

# -----------------------------------------------------------------------------
# Job Description Parsing Prompt
# -----------------------------------------------------------------------------
JOB_DESCRIPTION_PARSE_PROMPT = """Parse the following job description and extract structured data as JSON.

Job Description:
{job_description}

Extract and return ONLY a JSON object with these exact fields:
{{
  "company": "Company name",
  "position": "Job title",
  "location": "Job location (or 'Remote')",
  "salary_range": "Salary range if mentioned, otherwise null",
  "required_skills": ["skill1", "skill2"],
  "preferred_skills": ["skill1", "skill2"],
  "keywords": ["keyword1", "keyword2"]
}}

Return only the JSON object, no markdown formatting or explanation."""


# -----------------------------------------------------------------------------
# Tailored Application Prompt
# -----------------------------------------------------------------------------
APPLICATION_GENERATION_PROMPT = """You are an expert resume writer. Based on the master resume and job description below, create a tailored resume and cover letter.

MASTER RESUME:
{master_resume}

JOB DESCRIPTION:
Company: {company}
Position: {position}
Required Skills: {required_skills}
Keywords: {keywords}

Task:
1. Select the most relevant experiences, projects, and skills from the master resume
2. Tailor descriptions to match job requirements using keywords naturally
3. Generate a professional cover letter highlighting key matches
4. Return ONLY a JSON object with this structure:

{{
  "tailored_resume": {{
    "personal_info": {{...}},
    "experience": [...],
    "education": [...],
    "projects": [...],
    "skills": {{...}}
  }},
  "cover_letter": "Full cover letter text here..."
}}

Return only the JSON object, no markdown or explanation."""
