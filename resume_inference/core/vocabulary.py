"""
Keyword tables shared by the extractors.

Everything here is data: section header keywords, role vocabulary, technology
names, and the word lists the skill validator filters on. Extractors import
these tables as module constants; nothing here is computed per document.
"""

import re
from typing import Dict, FrozenSet, Pattern, Tuple


# ============================================================================
# Section headers
# ============================================================================

SECTION_HEADERS: Dict[str, FrozenSet[str]] = {
    "summary": frozenset({
        "summary",
        "professional summary",
        "career summary",
        "executive summary",
        "objective",
        "career objective",
        "profile",
        "professional profile",
        "personal profile",
        "about",
        "about me",
        "overview",
    }),
    "experience": frozenset({
        "experience",
        "work experience",
        "professional experience",
        "relevant experience",
        "career experience",
        "employment",
        "employment history",
        "work history",
        "career history",
        "experience & internships",
    }),
    "education": frozenset({
        "education",
        "academic",
        "academics",
        "academic background",
        "academic qualifications",
        "education & training",
        "education and training",
        "degree",
        "degrees",
        "qualifications",
    }),
    "skills": frozenset({
        "skills",
        "technical skills",
        "core skills",
        "key skills",
        "skills & tools",
        "skills and tools",
        "skill set",
        "skillset",
        "competencies",
        "core competencies",
        "proficiencies",
        "technical proficiencies",
        "technologies",
        "tech stack",
        "expertise",
        "areas of expertise",
        "tools",
    }),
    "projects": frozenset({
        "projects",
        "personal projects",
        "side projects",
        "key projects",
        "selected projects",
        "academic projects",
    }),
    "certifications": frozenset({
        "certifications",
        "certification",
        "certificates",
        "licenses",
        "licenses & certifications",
        "licenses and certifications",
    }),
    "other": frozenset({
        "awards",
        "honors",
        "honors & awards",
        "achievements",
        "languages",
        "interests",
        "hobbies",
        "references",
        "publications",
        "volunteer",
        "volunteering",
        "volunteer experience",
        "activities",
        "additional information",
    }),
}

# Flat set of every header keyword (never a name, never a skill)
ALL_SECTION_KEYWORDS: FrozenSet[str] = frozenset(
    kw for keywords in SECTION_HEADERS.values() for kw in keywords
)

# Header lines that are not sections but are still never a name
DOCUMENT_TITLE_WORDS: FrozenSet[str] = frozenset({
    "resume", "résumé", "curriculum vitae", "cv", "contact", "contact information",
    "personal information", "personal details",
})


# ============================================================================
# Roles
# ============================================================================

# Job-function nouns, seniority adjectives and front/back/full-stack fragments
ROLE_KEYWORDS: Tuple[str, ...] = (
    # functions
    "engineer", "developer", "programmer", "architect", "designer", "analyst",
    "scientist", "researcher", "consultant", "specialist", "manager", "director",
    "administrator", "coordinator", "officer", "technician", "strategist",
    "intern", "founder", "co-founder", "owner", "president", "accountant",
    "recruiter", "writer", "editor", "tester", "trainer", "advisor",
    "representative", "executive", "assistant", "associate", "teacher",
    "instructor", "nurse", "devops", "sre", "qa", "cto", "ceo", "cfo", "coo", "vp",
    "freelancer", "contractor",
    # seniority
    "senior", "sr", "sr.", "junior", "jr", "jr.", "lead", "principal", "staff",
    "chief", "head",
    # stack fragments
    "frontend", "front-end", "front end", "backend", "back-end", "back end",
    "fullstack", "full-stack", "full stack",
)


def _keyword_pattern(keywords: Tuple[str, ...]) -> Pattern[str]:
    """Case-insensitive alternation that only matches whole words."""
    alternation = "|".join(
        re.escape(kw) for kw in sorted(keywords, key=len, reverse=True)
    )
    return re.compile(rf"(?<![A-Za-z0-9])(?:{alternation})(?![A-Za-z0-9])", re.IGNORECASE)


ROLE_KEYWORD_RE = _keyword_pattern(ROLE_KEYWORDS)


# ============================================================================
# Technology vocabulary
# ============================================================================

TECH_VOCABULARY: FrozenSet[str] = frozenset({
    # languages
    "python", "java", "javascript", "typescript", "c", "c++", "c#", "go", "golang",
    "rust", "ruby", "php", "swift", "kotlin", "scala", "r", "matlab", "perl",
    "bash", "shell", "powershell", "sql", "nosql", "html", "html5", "css", "css3",
    "sass", "scss", "less", "dart", "elixir", "haskell", "lua", "solidity",
    "objective-c", "es6",
    # frontend
    "react", "react.js", "reactjs", "react native", "angular", "angularjs", "vue",
    "vue.js", "vuejs", "svelte", "next.js", "nextjs", "nuxt", "nuxt.js", "jquery",
    "redux", "tailwind", "tailwind css", "tailwindcss", "bootstrap", "material ui",
    "mui", "webpack", "vite", "babel", "storybook", "three.js", "d3.js", "d3",
    # backend
    "node", "node.js", "nodejs", "express", "express.js", "nestjs", "django",
    "flask", "fastapi", "spring", "spring boot", "rails", "ruby on rails",
    "laravel", ".net", "asp.net", "dotnet", "graphql", "rest", "rest api",
    "rest apis", "restful apis", "grpc", "websocket", "websockets", "oauth", "jwt",
    "microservices", "serverless",
    # data stores
    "postgresql", "postgres", "mysql", "sqlite", "mongodb", "redis",
    "elasticsearch", "dynamodb", "cassandra", "oracle", "sql server", "firebase",
    "supabase", "prisma", "sequelize", "sqlalchemy", "mongoose",
    # infrastructure
    "docker", "kubernetes", "k8s", "terraform", "ansible", "jenkins",
    "github actions", "gitlab ci", "ci/cd", "aws", "azure", "gcp", "google cloud",
    "heroku", "vercel", "netlify", "linux", "unix", "nginx", "apache", "kafka",
    "rabbitmq", "lambda", "s3", "ec2", "cloudflare",
    # data / ml
    "spark", "hadoop", "airflow", "pandas", "numpy", "scikit-learn", "tensorflow",
    "pytorch", "keras", "opencv", "machine learning", "deep learning", "nlp",
    "llm", "llms", "openai", "langchain", "data structures", "algorithms",
    "tableau", "power bi", "excel",
    # testing
    "jest", "mocha", "cypress", "playwright", "selenium", "pytest", "junit",
    "vitest", "testing library",
    # tooling
    "git", "github", "gitlab", "bitbucket", "jira", "confluence", "figma",
    "sketch", "photoshop", "illustrator", "postman", "swagger", "npm", "yarn",
    "pnpm", "eslint", "prettier", "vscode", "vim",
    # mobile / other
    "flutter", "ios", "android", "xcode", "electron", "unity", "web3",
    "blockchain",
    # practices
    "agile", "scrum", "kanban", "tdd", "oop", "system design",
})

# Multi-word skills whose first words identify a known framework or platform
COMPOUND_SKILL_PREFIXES: Tuple[str, ...] = (
    "react native", "ruby on rails", "spring boot", "google cloud",
    "amazon web services", "microsoft", "azure", "aws", "visual studio",
    "adobe", "apache", "github", "gitlab", "sql server", "machine learning",
    "deep learning", "natural language", "computer vision", "test driven",
    "object oriented", "continuous integration", "continuous delivery",
    "data structures", "version control", "responsive web",
)

# Display names scanned for when the skills section is thin. Ambiguous short
# names (C, R, Go) are left out: they match ordinary prose.
FALLBACK_TECH_TERMS: Tuple[str, ...] = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Ruby", "PHP",
    "Swift", "Kotlin", "Rust", "Golang", "SQL", "HTML", "CSS", "React",
    "React Native", "Angular", "Vue.js", "Next.js", "Node.js", "Express",
    "Django", "Flask", "FastAPI", "Spring Boot", "Ruby on Rails", "Laravel",
    ".NET", "GraphQL", "REST", "PostgreSQL", "MySQL", "MongoDB", "Redis",
    "Elasticsearch", "Firebase", "Docker", "Kubernetes", "Terraform", "AWS",
    "Azure", "GCP", "Linux", "Git", "GitHub", "Jenkins", "Kafka", "Tailwind",
    "Redux", "Jest", "Cypress", "Figma", "TensorFlow", "PyTorch", "Pandas",
    "NumPy", "Microservices", "CI/CD", "Agile", "Scrum",
)

FILE_EXTENSION_SUFFIX_RE = re.compile(r"\.(?:js|ts|jsx|tsx|py|rb|go|net|io|sh|css|html)$", re.IGNORECASE)
VERSION_NUMBER_RE = re.compile(r"(?:\b[vV]?\d+(?:\.\d+)+\b|[A-Za-z]\d{1,2}$|\s\d{1,2}$)")


# ============================================================================
# Skill validator word lists
# ============================================================================

# A candidate starting with one of these is a sentence fragment
CONNECTIVE_PREFIXES: FrozenSet[str] = frozenset({
    "and", "the", "to", "with", "using", "about", "passionate", "for", "of",
    "in", "on", "by", "from", "as", "a", "an", "or", "but", "including", "while",
    "through", "across", "into", "which", "that", "who", "my", "our", "we", "i",
    "also", "via", "where", "when", "is", "are", "was", "were", "have", "has",
})

# A candidate that is exactly one of these is noise
CONNECTIVE_STOPWORDS: FrozenSet[str] = frozenset({
    "and", "or", "the", "to", "with", "of", "in", "on", "for", "a", "an", "by",
    "at", "as", "etc", "using", "via", "plus", "also", "other", "more",
})

# Words that signal prose bleeding into the skills region
SENTENCE_CONNECTIVES: FrozenSet[str] = frozenset({
    "and", "the", "with", "to", "for", "of", "in", "that", "which", "who",
    "while", "through", "passionate", "experienced", "delivering", "building",
    "focused", "years", "dedicated", "driven",
})

ORGANIZATION_KEYWORDS: Tuple[str, ...] = (
    "university", "institute", "academy", "college", "school", "foundation",
    "corporation", "inc", "llc", "ltd", "gmbh",
)
ORGANIZATION_KEYWORD_RE = _keyword_pattern(ORGANIZATION_KEYWORDS)

PAST_TENSE_VERBS: FrozenSet[str] = frozenset({
    "ensured", "developed", "created", "built", "designed", "implemented", "led",
    "managed", "delivered", "improved", "increased", "reduced", "collaborated",
    "worked", "maintained", "optimized", "launched", "architected", "established",
    "coordinated", "achieved", "spearheaded", "streamlined", "migrated",
    "automated", "deployed", "integrated", "wrote", "mentored", "contributed",
    "drove", "owned", "shipped", "supported", "analyzed", "conducted", "enhanced",
    "facilitated", "generated", "participated", "performed", "produced",
    "provided", "resolved", "refactored", "researched", "tested", "utilized",
})


# ============================================================================
# Places
# ============================================================================

US_STATE_CODES: FrozenSet[str] = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN",
    "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV",
    "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN",
    "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
})

PLACE_KEYWORDS: FrozenSet[str] = frozenset({
    # states
    "alabama", "alaska", "arizona", "arkansas", "california", "colorado",
    "connecticut", "delaware", "florida", "georgia", "hawaii", "idaho",
    "illinois", "indiana", "iowa", "kansas", "kentucky", "louisiana", "maine",
    "maryland", "massachusetts", "michigan", "minnesota", "mississippi",
    "missouri", "montana", "nebraska", "nevada", "new hampshire", "new jersey",
    "new mexico", "new york", "north carolina", "north dakota", "ohio",
    "oklahoma", "oregon", "pennsylvania", "rhode island", "south carolina",
    "south dakota", "tennessee", "texas", "utah", "vermont", "virginia",
    "washington", "west virginia", "wisconsin", "wyoming",
    # countries
    "usa", "us", "united states", "canada", "uk", "united kingdom", "england",
    "ireland", "germany", "france", "spain", "italy", "netherlands", "portugal",
    "poland", "sweden", "norway", "denmark", "india", "pakistan", "china",
    "japan", "singapore", "australia", "new zealand", "brazil", "mexico",
    "argentina", "nigeria", "kenya", "egypt", "uae", "israel", "turkey",
    # qualifiers
    "remote", "hybrid",
})

# Words that make a "City, Region" match a technology pair instead
LOCATION_TECH_EXCLUSIONS: FrozenSet[str] = TECH_VOCABULARY | frozenset({
    "native", "script", "framework", "frameworks", "library", "libraries",
    "tools", "skills", "languages", "databases",
})


# ============================================================================
# URLs
# ============================================================================

# Providers already captured by other extractors, never a portfolio
NON_PORTFOLIO_DOMAINS: FrozenSet[str] = frozenset({
    "linkedin.com", "github.com", "gmail.com", "googlemail.com", "outlook.com", "hotmail.com",
    "live.com", "yahoo.com", "icloud.com", "me.com", "aol.com", "mail.com",
    "proton.me", "protonmail.com", "zoho.com", "gmx.com",
})

# Libraries and services whose names are real domains ("Socket.io")
DOMAIN_SHAPED_TECH_NAMES: FrozenSet[str] = frozenset({
    "socket.io", "ghost.io", "chart.io", "fly.io", "sentry.io", "strapi.io",
    "appwrite.io", "segment.io", "bun.sh", "deno.com", "render.com",
    "railway.app", "expo.dev", "supabase.io", "hasura.io", "pusher.com",
})

# Personal-site shapes, in priority order
PERSONAL_SITE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\.(?:vercel\.app|netlify\.app|github\.io|herokuapp\.com|pages\.dev|web\.app|firebaseapp\.com|surge\.sh|onrender\.com)$", re.IGNORECASE),
    re.compile(r"\.(?:dev|io|me|app|tech|site|codes|page)$", re.IGNORECASE),
)


# ============================================================================
# Skills section
# ============================================================================

# "Languages: Python, Go" inside a skills section is a category, not the
# start of a spoken-languages section
SKILL_CATEGORY_WORDS: FrozenSet[str] = frozenset({
    "languages", "programming languages", "tools", "technologies", "frameworks",
    "libraries", "databases", "platforms", "cloud", "devops", "frontend",
    "backend", "testing", "expertise", "other",
})

# Technology names that are also ordinary English words; they only count as
# an exact match, never as a word found inside a longer phrase
AMBIGUOUS_TECH_WORDS: FrozenSet[str] = frozenset({
    "c", "r", "go", "less", "rest", "shell", "spring", "excel", "unity",
    "sketch", "lambda", "express", "node", "oracle", "swift", "rust", "ruby",
    "apache", "spark", "vim", "d3", "s3", "electron", "agile", "mocha",
    "babel", "prettier", "yarn", "rails",
})

# Fallback terms that are matched case-sensitively in prose
CASE_SENSITIVE_TERMS: FrozenSet[str] = frozenset({
    "Express", "REST", "Swift", "Rust", "Ruby", "Agile", "Scrum", "Git",
    "Pandas", "Jest", "Flask", "Redux", "Spring Boot",
})
