FSTAB_FILENAME = "fstab.yaml"
MOUNTPOINTS_KEY = "mountpoints"

# Mount types, derived from the mount URL
TYPE_ONEDRIVE = "onedrive"
TYPE_GOOGLE = "google"
TYPE_MARKUP = "markup"

ONEDRIVE_HOST_SUFFIXES = (".sharepoint.com", "1drv.ms", "onedrive.live.com")
GOOGLE_HOSTS = ("docs.google.com", "drive.google.com")
