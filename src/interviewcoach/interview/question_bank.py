"""
Built-in question bank, keyed by category and difficulty.

Each entry carries the keywords the local evaluator looks for in an answer.
"""
from typing import Dict, List, Any

QuestionPool = List[Dict[str, Any]]

QUESTION_BANK: Dict[str, Dict[str, QuestionPool]] = {
    "technical": {
        "easy": [
            {"text": "What is the difference between let, const, and var in JavaScript?",
             "expected_keywords": ["scope", "hoisting", "block", "function", "reassign", "mutable", "immutable"]},
            {"text": "Explain what an API is and how it works.",
             "expected_keywords": ["interface", "request", "response", "endpoint", "HTTP", "REST", "client", "server"]},
            {"text": "What is the difference between SQL and NoSQL databases?",
             "expected_keywords": ["relational", "schema", "table", "document", "flexible", "structured", "MongoDB", "MySQL"]},
            {"text": "What is version control and why is it important?",
             "expected_keywords": ["git", "track", "changes", "collaborate", "branch", "merge", "history", "repository"]},
            {"text": "Explain the concept of responsive web design.",
             "expected_keywords": ["media queries", "flexible", "viewport", "mobile", "breakpoints", "CSS", "grid", "layout"]},
        ],
        "medium": [
            {"text": "Explain the concept of closures in JavaScript with an example.",
             "expected_keywords": ["function", "scope", "variable", "inner", "outer", "lexical", "access", "memory"]},
            {"text": "What are the main principles of Object-Oriented Programming?",
             "expected_keywords": ["encapsulation", "inheritance", "polymorphism", "abstraction", "class", "object"]},
            {"text": "Describe the event loop in Node.js and how it handles asynchronous operations.",
             "expected_keywords": ["callback", "queue", "stack", "non-blocking", "single-threaded", "async", "promise"]},
            {"text": "What is the difference between REST and GraphQL?",
             "expected_keywords": ["endpoint", "query", "mutation", "overfetching", "schema", "resolver", "flexibility"]},
            {"text": "Explain how indexing works in databases and why it's important.",
             "expected_keywords": ["performance", "search", "B-tree", "query", "speed", "lookup", "overhead"]},
        ],
        "hard": [
            {"text": "Explain microservices architecture and its trade-offs compared to monolithic architecture.",
             "expected_keywords": ["distributed", "scalability", "independent", "deployment", "complexity", "communication", "service", "decoupled"]},
            {"text": "How would you design a rate limiter for a high-traffic API?",
             "expected_keywords": ["token bucket", "sliding window", "distributed", "Redis", "throttle", "middleware", "limit"]},
            {"text": "Describe how garbage collection works in JavaScript's V8 engine.",
             "expected_keywords": ["mark", "sweep", "heap", "memory", "generational", "scavenge", "reference", "allocation"]},
            {"text": "Explain the CAP theorem and its implications for distributed systems.",
             "expected_keywords": ["consistency", "availability", "partition", "tolerance", "trade-off", "distributed", "network"]},
            {"text": "How would you implement authentication and authorization in a microservices environment?",
             "expected_keywords": ["JWT", "OAuth", "token", "gateway", "service", "SSO", "RBAC", "session"]},
        ],
    },
    "behavioral": {
        "easy": [
            {"text": "Tell me about yourself and your background.",
             "expected_keywords": ["experience", "education", "passion", "skills", "career", "goal", "background"]},
            {"text": "Why are you interested in this position?",
             "expected_keywords": ["growth", "opportunity", "skills", "company", "challenge", "contribution", "passion"]},
            {"text": "How do you handle stress at work?",
             "expected_keywords": ["prioritize", "manage", "calm", "organize", "communicate", "break", "focus"]},
            {"text": "Describe your ideal work environment.",
             "expected_keywords": ["collaborative", "supportive", "growth", "communication", "flexible", "team", "learning"]},
            {"text": "What are your greatest strengths?",
             "expected_keywords": ["skill", "ability", "example", "strength", "demonstrate", "impact", "result"]},
        ],
        "medium": [
            {"text": "Tell me about a time you had to deal with a difficult team member.",
             "expected_keywords": ["communication", "conflict", "resolution", "listen", "compromise", "professional", "outcome"]},
            {"text": "Describe a situation where you had to meet a tight deadline.",
             "expected_keywords": ["prioritize", "organize", "plan", "communicate", "deliver", "pressure", "time management"]},
            {"text": "Give an example of a time you showed leadership.",
             "expected_keywords": ["initiative", "guide", "team", "decision", "responsibility", "motivate", "result"]},
            {"text": "Tell me about a time you failed and what you learned from it.",
             "expected_keywords": ["mistake", "learn", "improve", "reflect", "grow", "adapt", "accountability"]},
            {"text": "How do you handle receiving constructive criticism?",
             "expected_keywords": ["feedback", "improve", "open", "listen", "learn", "change", "perspective"]},
        ],
        "hard": [
            {"text": "Describe a situation where you had to make a decision with incomplete information.",
             "expected_keywords": ["analyze", "risk", "judgment", "data", "decision", "uncertain", "outcome", "evaluate"]},
            {"text": "Tell me about a time you had to influence stakeholders who disagreed with your approach.",
             "expected_keywords": ["persuade", "data", "communicate", "compromise", "evidence", "stakeholder", "alignment"]},
            {"text": "Describe a complex project you managed from start to finish.",
             "expected_keywords": ["plan", "execute", "coordinate", "milestone", "challenge", "deliver", "team", "scope"]},
            {"text": "Tell me about a time you had to adapt to a major change in your organization.",
             "expected_keywords": ["adapt", "flexible", "change", "resilient", "positive", "learn", "transition"]},
            {"text": "How would you handle a situation where your team disagrees with upper management's direction?",
             "expected_keywords": ["communicate", "align", "understand", "bridge", "advocate", "professional", "compromise"]},
        ],
    },
    "system-design": {
        "easy": [
            {"text": "How would you design a URL shortening service like bit.ly?",
             "expected_keywords": ["hash", "database", "redirect", "unique", "encode", "store", "lookup"]},
            {"text": "Design a basic chat application.",
             "expected_keywords": ["websocket", "real-time", "message", "user", "room", "store", "notification"]},
            {"text": "How would you design a simple file storage system?",
             "expected_keywords": ["upload", "download", "metadata", "storage", "access", "organize", "permission"]},
        ],
        "medium": [
            {"text": "Design a notification system for a social media platform.",
             "expected_keywords": ["push", "queue", "real-time", "preference", "batch", "priority", "delivery"]},
            {"text": "How would you design a caching layer for a web application?",
             "expected_keywords": ["Redis", "TTL", "invalidation", "hit rate", "eviction", "LRU", "distributed"]},
            {"text": "Design an e-commerce shopping cart system.",
             "expected_keywords": ["session", "database", "inventory", "pricing", "checkout", "scalable", "state"]},
        ],
        "hard": [
            {"text": "Design a real-time collaborative document editor like Google Docs.",
             "expected_keywords": ["CRDT", "operational transform", "websocket", "conflict", "sync", "cursor", "concurrent"]},
            {"text": "How would you design a video streaming platform like YouTube?",
             "expected_keywords": ["CDN", "encoding", "transcoding", "storage", "streaming", "recommendation", "scale"]},
            {"text": "Design a distributed task scheduling system.",
             "expected_keywords": ["queue", "worker", "priority", "retry", "idempotent", "distributed", "fault-tolerant"]},
        ],
    },
    "general": {
        "easy": [
            {"text": "What motivates you in your career?",
             "expected_keywords": ["growth", "learning", "impact", "challenge", "passion", "goal", "purpose"]},
            {"text": "Where do you see yourself in 5 years?",
             "expected_keywords": ["growth", "leadership", "skills", "contribute", "develop", "career", "goal"]},
            {"text": "How do you stay updated with industry trends?",
             "expected_keywords": ["read", "learn", "community", "conference", "practice", "course", "follow"]},
        ],
        "medium": [
            {"text": "How do you approach learning a new technology or tool?",
             "expected_keywords": ["research", "practice", "documentation", "project", "hands-on", "understand", "apply"]},
            {"text": "Describe your approach to problem-solving.",
             "expected_keywords": ["analyze", "break down", "research", "solution", "test", "iterate", "systematic"]},
            {"text": "How do you prioritize tasks when everything seems urgent?",
             "expected_keywords": ["prioritize", "impact", "deadline", "communicate", "delegate", "organize", "focus"]},
        ],
        "hard": [
            {"text": "How would you handle a situation where you strongly disagree with a technical decision made by your team lead?",
             "expected_keywords": ["communicate", "data", "respect", "evidence", "discuss", "professional", "alternative"]},
            {"text": "Describe how you would onboard yourself into a large, unfamiliar codebase.",
             "expected_keywords": ["documentation", "explore", "ask", "understand", "architecture", "test", "incremental"]},
            {"text": "What would you do if you discovered a critical security vulnerability in production?",
             "expected_keywords": ["report", "immediate", "patch", "communicate", "assess", "document", "prevent"]},
        ],
    },
}
