from blinker import Namespace

_asana = Namespace()

before_request = _asana.signal('before-request')

after_response = _asana.signal('after-response')

page_fetched = _asana.signal('page-fetched')
