from typing import Dict, Any
import threading

# In-memory crush job registry
CRUSH_JOBS: Dict[str, Dict[str, Any]] = {}

# Guards CRUSH_JOBS against updates from worker threads
CRUSH_JOBS_LOCK = threading.RLock()
