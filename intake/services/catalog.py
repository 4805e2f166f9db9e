# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Static catalog of the services offered on the site."""
from typing import Any, Dict, List, Optional

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=400&q=80"

SERVICES: List[Dict[str, Any]] = [
    {
        "id": "website-development",
        "name": "Website Development",
        "description": "Get modern, fast, responsive websites for your business or brand.",
        "longDescription": "High-performance websites built on current technology, secure "
                           "by default and optimized for search engines.",
        "features": ["Responsive Design", "SEO Optimization", "Fast Loading Speed",
                     "Mobile-First Approach", "Content Management System",
                     "E-commerce Integration"],
        "technologies": ["React", "Node.js", "MongoDB", "Express", "Next.js", "WordPress"],
        "icon": "FaLaptopCode",
        "image": _IMG.format("1519389950473-47ba0277781c"),
    },
    {
        "id": "app-development",
        "name": "App Development",
        "description": "We build Android & iOS apps tailored to your goals.",
        "longDescription": "Native and cross-platform mobile applications that turn ideas "
                           "into products people keep using.",
        "features": ["Native iOS & Android Development", "Cross-Platform Solutions",
                     "UI/UX Design", "App Store Optimization", "Push Notifications",
                     "Offline Functionality"],
        "technologies": ["React Native", "Flutter", "Swift", "Kotlin", "Firebase", "AWS"],
        "icon": "FaMobileAlt",
        "image": _IMG.format("1519125323398-675f0ddb6308"),
    },
    {
        "id": "game-development",
        "name": "Game Development",
        "description": "2D/3D browser or mobile games built from scratch.",
        "longDescription": "Browser and mobile games from concept art to store release.",
        "features": ["2D & 3D Games", "Multiplayer", "Cross-Platform Builds", "Monetization"],
        "technologies": ["Unity", "Unreal Engine", "Godot", "Phaser"],
        "icon": "FaGamepad",
        "image": _IMG.format("1461749280684-dccba630e2f6"),
    },
    {
        "id": "logo-design",
        "name": "Logo Design",
        "description": "High-quality branding & logos that define your identity.",
        "longDescription": "Logos and brand kits that stay recognizable at every size.",
        "features": ["Custom Logo Concepts", "Brand Guidelines", "Vector Source Files",
                     "Unlimited Revisions"],
        "technologies": ["Illustrator", "Figma", "Photoshop"],
        "icon": "FaPaintBrush",
        "image": _IMG.format("1506744038136-46273834b3fb"),
    },
    {
        "id": "seo-backlinks",
        "name": "SEO & Backlinks",
        "description": "Rank higher on Google with optimized SEO strategies.",
        "longDescription": "Technical audits, on-page work and link building that move "
                           "rankings and organic traffic.",
        "features": ["Technical SEO Audit", "Keyword Research", "On-Page Optimization",
                     "Quality Backlinks", "Monthly Reporting"],
        "technologies": ["Google Search Console", "Ahrefs", "SEMrush"],
        "icon": "FaSearch",
        "image": _IMG.format("1517694712202-14dd9538aa97"),
    },
    {
        "id": "ui-ux-design",
        "name": "UI/UX Design",
        "description": "Clean, beautiful, user-friendly interfaces for web and apps.",
        "longDescription": "Research-driven interface design, from wireframes to "
                           "developer-ready prototypes.",
        "features": ["User Research", "Wireframing", "Interactive Prototypes", "Design Systems"],
        "technologies": ["Figma", "Adobe XD", "Sketch"],
        "icon": "FaUserAlt",
        "image": _IMG.format("1515378791036-0648a3ef77b2"),
    },
    {
        "id": "video-production",
        "name": "Video Production & Animation",
        "description": "Professional video content and engaging animations for your brand.",
        "longDescription": "Explainers, product videos and motion graphics for web and social.",
        "features": ["Explainer Videos", "Motion Graphics", "Video Editing", "2D Animation"],
        "technologies": ["After Effects", "Premiere Pro", "Blender"],
        "icon": "FaVideo",
        "image": _IMG.format("1574717024653-61fd2cf4d44d"),
    },
    {
        "id": "chatbot-development",
        "name": "Chatbot Development",
        "description": "Intelligent chatbots to enhance customer service and engagement.",
        "longDescription": "Conversational assistants for support, lead capture and booking.",
        "features": ["Website Chat Widgets", "WhatsApp & Messenger Bots", "AI Responses",
                     "CRM Handoff"],
        "technologies": ["Dialogflow", "Rasa", "OpenAI", "Node.js"],
        "icon": "FaRobot",
        "image": _IMG.format("1531746790731-6c087fecd65a"),
    },
    {
        "id": "crm-erp-integration",
        "name": "CRM/ERP Integrations",
        "description": "Seamless integration of business systems for better workflow.",
        "longDescription": "Connect sales, finance and operations tools so data is entered once.",
        "features": ["Data Synchronization", "Workflow Automation", "Custom Connectors",
                     "Migration Support"],
        "technologies": ["Salesforce", "HubSpot", "Zoho", "Odoo", "SAP"],
        "icon": "FaCogs",
        "image": _IMG.format("1551288049-bebda4e38f71"),
    },
    {
        "id": "custom-api-development",
        "name": "Custom API Development",
        "description": "Robust APIs to connect your applications and services.",
        "longDescription": "Documented, versioned REST and GraphQL APIs with authentication "
                           "and monitoring.",
        "features": ["REST & GraphQL APIs", "Authentication", "Rate Limiting", "API Documentation"],
        "technologies": ["Node.js", "Python", "FastAPI", "PostgreSQL", "Docker"],
        "icon": "FaCode",
        "image": _IMG.format("1555066931-4365d14bab8c"),
    },
    {
        "id": "content-writing",
        "name": "Content Writing & Copywriting",
        "description": "Compelling content that converts visitors into customers.",
        "longDescription": "Website copy, blog posts and campaigns written for readers and "
                           "search engines alike.",
        "features": ["Website Copy", "Blog Articles", "Product Descriptions", "Email Campaigns"],
        "technologies": ["WordPress", "Google Docs", "Grammarly"],
        "icon": "FaPen",
        "image": _IMG.format("1455390582262-044cdead277a"),
    },
]

_SUMMARY_FIELDS = ("id", "name", "description", "icon", "image")
_BY_ID = {s["id"]: s for s in SERVICES}


def list_services() -> List[Dict[str, Any]]:
    return [{k: s[k] for k in _SUMMARY_FIELDS} for s in SERVICES]


def get_service(service_id: str) -> Optional[Dict[str, Any]]:
    return _BY_ID.get(service_id)
