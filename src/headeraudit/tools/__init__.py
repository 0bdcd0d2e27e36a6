"""Tools package for headeraudit."""
