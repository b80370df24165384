"""bookingprobe - HTTP test harness for booking-management APIs."""

__version__ = "0.1.0"
