from zen_service.server import main

main()
