"""Supporting pieces: interceptors, environment lookups, events and flow loading."""