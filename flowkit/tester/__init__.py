"""A threaded WSGI server that can be stopped gracefully."""