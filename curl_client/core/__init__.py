SERVICE_NAME = "curl_client"
