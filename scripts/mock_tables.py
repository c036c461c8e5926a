import numpy as np
import pandas as pd
from pathlib import Path

n_rows = 200

owners = ["alice", "bob", "carol", "dave"]
statuses = ["active", "archived", "failed"]

logs = pd.DataFrame(
    {
        "id": np.arange(1, n_rows + 1),
        "owner": np.random.choice(owners, size=n_rows),
        "status": np.random.choice(statuses, size=n_rows, p=[0.6, 0.3, 0.1]),
        "message": [f"event {i}" for i in range(n_rows)],
    }
)

Path("config/data").mkdir(parents=True, exist_ok=True)
logs.to_csv("config/data/logs.csv", index=False)
print("wrote config/data/logs.csv", logs.shape)
