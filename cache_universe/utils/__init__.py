"""Pure helper functions shared by systems and the presentation layer."""
