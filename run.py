# run.py

import os
from leadportal import create_app


app = create_app(os.environ.get('FLASK_ENV', 'default'))

if __name__ == '__main__':
    app.run()
