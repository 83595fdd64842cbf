"""Flow state: change records, snapshots, steps, recording modes and rebuilding."""