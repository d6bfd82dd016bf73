"""ping.py"""

from datetime import timedelta
from ipaddress import ip_address

from pinion import Application

app = Application("ping", "Send ICMP echo requests.").version("ping 0.1.0")
debug = app.add_flag("debug", "Enable debug mode.", type=bool)
timeout = app.add_flag(
    "timeout", "Timeout waiting for ping.", short="t", type=timedelta, default="5s"
)
ip = app.add_argument("ip", "IP address to ping.", type=ip_address, required=True)
count = app.add_argument("count", "Number of packets to send.", type=int)

if __name__ == "__main__":
    app.run()
    print(f"Would ping: {ip.get()} with timeout {timeout.get()}")
