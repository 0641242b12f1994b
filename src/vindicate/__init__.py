"""vindicate: spaced-repetition flashcards for clinical presentations."""
