"""Default evaluation criteria and technology catalog.

Loaded into an empty database on first start. Raw metrics mix scales on
purpose: star/download/job counts are unbounded, the *_score values are
10-point ratings.
"""

from __future__ import annotations

from .core.models import CriterionType

DEFAULT_CRITERIA: list[dict] = [
    {"name": "Performance", "description": "Speed, throughput, and efficiency metrics", "type": CriterionType.PERFORMANCE},
    {"name": "Learning Curve", "description": "Ease of adoption and time to productivity", "type": CriterionType.LEARNING_CURVE},
    {"name": "Community Support", "description": "Active community, forums, and ecosystem", "type": CriterionType.COMMUNITY},
    {"name": "Documentation Quality", "description": "Completeness and clarity of documentation", "type": CriterionType.DOCUMENTATION},
    {"name": "Scalability", "description": "Ability to handle growth and scale", "type": CriterionType.SCALABILITY},
    {"name": "Security", "description": "Security features and track record", "type": CriterionType.SECURITY},
    {"name": "Maturity", "description": "Stability and production readiness", "type": CriterionType.MATURITY},
    {"name": "Developer Experience", "description": "Development velocity and tooling", "type": CriterionType.DEVELOPER_EXPERIENCE},
    {"name": "Cost", "description": "Licensing, hosting, and operational costs", "type": CriterionType.COST},
]

DEFAULT_TECHNOLOGIES: list[dict] = [
    {
        "name": "React",
        "category": "frontend-framework",
        "description": "A JavaScript library for building user interfaces with component-based architecture",
        "metrics": {
            "github_stars": 220000.0, "npm_downloads": 20500000.0, "job_openings": 85000.0,
            "satisfaction_score": 8.7, "performance_score": 8.5, "learning_curve_score": 7.3, "community_score": 9.8,
        },
        "tags": ["javascript", "frontend", "popular"],
    },
    {
        "name": "Vue.js",
        "category": "frontend-framework",
        "description": "Progressive JavaScript framework for building user interfaces",
        "metrics": {
            "github_stars": 206000.0, "npm_downloads": 4200000.0, "job_openings": 35000.0,
            "satisfaction_score": 9.1, "performance_score": 8.8, "learning_curve_score": 8.9, "community_score": 8.7,
        },
        "tags": ["javascript", "frontend", "progressive"],
    },
    {
        "name": "Angular",
        "category": "frontend-framework",
        "description": "Platform for building mobile and desktop web applications with TypeScript",
        "metrics": {
            "github_stars": 93000.0, "npm_downloads": 3100000.0, "job_openings": 42000.0,
            "satisfaction_score": 7.8, "performance_score": 8.4, "learning_curve_score": 6.2, "community_score": 8.9,
        },
        "tags": ["typescript", "frontend", "enterprise"],
    },
    {
        "name": "Node.js",
        "category": "backend-runtime",
        "description": "JavaScript runtime built on Chrome's V8 engine for server-side development",
        "metrics": {
            "github_stars": 104000.0, "npm_downloads": 45000000.0, "job_openings": 78000.0,
            "satisfaction_score": 8.6, "performance_score": 8.7, "learning_curve_score": 8.1, "community_score": 9.6,
        },
        "tags": ["javascript", "backend", "runtime"],
    },
    {
        "name": "Spring Boot",
        "category": "backend-framework",
        "description": "Java framework that makes it easy to create stand-alone, production-grade applications",
        "metrics": {
            "github_stars": 72000.0, "job_openings": 55000.0,
            "satisfaction_score": 8.1, "performance_score": 8.6, "learning_curve_score": 6.8, "community_score": 9.0,
        },
        "tags": ["java", "backend", "enterprise"],
    },
    {
        "name": "PostgreSQL",
        "category": "relational-database",
        "description": "Advanced open source relational database with strong ACID compliance",
        "metrics": {
            "github_stars": 15000.0, "job_openings": 28000.0,
            "satisfaction_score": 8.8, "performance_score": 8.9, "learning_curve_score": 7.4, "community_score": 9.1,
        },
        "tags": ["sql", "relational", "open-source"],
    },
    {
        "name": "Redis",
        "category": "cache-database",
        "description": "In-memory data structure store used as database, cache, and message broker",
        "metrics": {
            "github_stars": 64000.0, "job_openings": 18000.0,
            "satisfaction_score": 9.0, "performance_score": 9.8, "learning_curve_score": 8.5, "community_score": 8.9,
        },
        "tags": ["cache", "in-memory", "fast"],
    },
    {
        "name": "Docker",
        "category": "containerization",
        "description": "Platform for developing, shipping, and running applications in containers",
        "metrics": {
            "github_stars": 67000.0, "job_openings": 45000.0,
            "satisfaction_score": 8.9, "performance_score": 8.6, "learning_curve_score": 7.8, "community_score": 9.5,
        },
        "tags": ["containers", "devops", "deployment"],
    },
    {
        "name": "Amazon Web Services",
        "category": "cloud-platform",
        "description": "Comprehensive cloud computing platform with extensive service portfolio",
        "metrics": {
            "github_stars": 85000.0, "job_openings": 45000.0,
            "satisfaction_score": 8.2, "performance_score": 9.1, "learning_curve_score": 6.5, "community_score": 9.3,
        },
        "tags": ["cloud", "infrastructure", "enterprise"],
    },
]
