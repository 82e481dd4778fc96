"""Study Buddy: course classmates, availability matching and study sessions."""
