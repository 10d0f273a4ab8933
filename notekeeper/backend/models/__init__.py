# Database models package
