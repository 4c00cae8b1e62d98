"""Config – 12-factor settings for the data-access layer."""
