"""pam-ssh-agent formula — build, install and sign the pam_ssh_agent PAM module."""

__version__ = "0.9.4"
