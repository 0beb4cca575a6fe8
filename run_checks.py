import time

from fastapi.testclient import TestClient

from alertnet.core.settings import Settings
from alertnet.main import create_app

with TestClient(create_app(Settings(SUBMISSION_DELAY_SECONDS=1, NEWS_REFRESH_SECONDS=0))) as client:
    print('ROOT:')
    print(client.get('/').json())

    print('\nHEALTH:')
    print(client.get('/health').json())

    print('\nMAP LAYERS:')
    layers = client.get('/map/layers').json()
    print(f"{len(layers['primitives'])} primitives, camera={layers['camera']}")

    print('\nSUBMIT REPORT:')
    resp = client.post('/reports', json={
        'type': 'Flood',
        'description': 'River overflow near market',
        'location_text': 'Artibonite',
    })
    print(resp.status_code, resp.json())
    submission_id = resp.json()['id']

    for _ in range(20):
        submission = client.get(f'/reports/submissions/{submission_id}').json()
        if submission['state'] == 'Committed':
            break
        time.sleep(0.2)
    print(submission)

    print('\nNOTIFICATIONS:')
    for notification in client.get('/notifications').json()['history']:
        print(f"[{notification['type']}] {notification['message']}")
