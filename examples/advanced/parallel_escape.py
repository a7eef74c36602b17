"""Thread safe: escape 1000 messages in parallel."""

from concurrent.futures import ThreadPoolExecutor

from telegram_escape import tg_escape

messages = [f"Order #{i} shipped. Track it at [here](https://e.com/t/{i}) :)" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(tg_escape, messages))

print(f"Escaped {len(results)} messages in parallel")
print("First:", results[0])
print("Last:", results[-1])
