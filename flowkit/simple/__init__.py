"""The simple flow model: basic, iterator and do-while task behaviors, with retries."""