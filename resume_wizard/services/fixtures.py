"""Static payloads returned when a workflow webhook is not configured."""

from __future__ import annotations

MOCK_JOB_DESCRIPTION = {
    "title": "Software Engineer",
    "company": "Tech Company",
    "location": "Remote",
    "description": "We are looking for a talented software engineer...",
    "requirements": [
        "3+ years of experience",
        "React/Next.js expertise",
        "Strong problem-solving skills",
    ],
    "raw_text": "Full job description text here...",
}

MOCK_ANALYSIS = {
    "skill_matches": [
        {
            "skill": "React",
            "strength": "strong",
            "evidence": "5 years of experience building React applications",
        },
        {
            "skill": "TypeScript",
            "strength": "strong",
            "evidence": "Used TypeScript in multiple production projects",
        },
        {
            "skill": "Node.js",
            "strength": "moderate",
            "evidence": "Built REST APIs with Express",
        },
    ],
    "skill_gaps": [
        {
            "skill": "AWS",
            "importance": "required",
            "suggestion": "Highlight any cloud experience you have",
        },
        {
            "skill": "Team Leadership",
            "importance": "preferred",
            "suggestion": "Mention any mentoring or leadership experience",
        },
    ],
    "questions": [
        {
            "id": "q1",
            "question": (
                "The job requires 3+ years of React experience. "
                "Can you specify how many years you've been working with React?"
            ),
            "type": "clarification",
        },
        {
            "id": "q2",
            "question": "Do you have any experience with AWS or other cloud platforms that we should highlight?",
            "type": "missing_skill",
        },
        {
            "id": "q3",
            "question": "Can you describe a project where you led a team or mentored other developers?",
            "type": "experience",
        },
    ],
    "ats_score": 72,
    "summary": (
        "Your resume shows strong technical skills that match the core requirements. "
        "Consider adding more details about cloud experience and leadership."
    ),
}

MOCK_OPTIMIZED_RESUME = {
    "contact": {
        "name": "John Doe",
        "email": "john.doe@email.com",
        "phone": "+1 (555) 123-4567",
        "location": "San Francisco, CA",
        "linkedin": "linkedin.com/in/johndoe",
    },
    "summary": (
        "Results-driven Senior Software Engineer with 5+ years of experience building scalable "
        "web applications using React and Node.js."
    ),
    "experience": [
        {
            "id": "1",
            "company": "Tech Company",
            "title": "Senior Software Engineer",
            "location": "San Francisco, CA",
            "startDate": "2020-01",
            "current": True,
            "bullets": [
                "Led development of microservices architecture serving 10M+ daily users",
                "Reduced page load time by 40% through lazy loading and code splitting",
                "Mentored team of 5 junior developers, conducting code reviews",
            ],
        }
    ],
    "education": [
        {
            "id": "1",
            "institution": "University of California",
            "degree": "B.S. Computer Science",
            "endDate": "2018",
        }
    ],
    "skills": ["JavaScript", "TypeScript", "React", "Node.js", "Python", "AWS", "Docker", "CI/CD"],
    "rawText": "",
    "optimizedSummary": "Results-driven Senior Software Engineer with 5+ years...",
    "optimizedExperience": [],
    "addedKeywords": ["microservices", "scalable", "mentorship", "CI/CD"],
    "atsScore": 89,
    "changes": [
        {
            "section": "Summary",
            "original": "Software engineer with experience in web development",
            "optimized": "Results-driven Senior Software Engineer with 5+ years of experience...",
            "reason": "Added specific years and quantifiable impact",
        },
        {
            "section": "Experience",
            "original": "Worked on improving system performance",
            "optimized": "Reduced page load time by 40% through implementation of...",
            "reason": "Added specific metrics and technical details",
        },
    ],
}
