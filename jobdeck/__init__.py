# JobDeck - Job Application Dashboard
"""
JobDeck - A job application tracking dashboard.

Store a master resume, job descriptions and application records, follow
upcoming interviews and reminders, and generate tailored resumes and cover
letters with a generative language model.
"""

__version__ = "1.0.0"
__author__ = "JobDeck"
__description__ = "Job application tracking dashboard with AI-tailored applications"
