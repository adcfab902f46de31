from cdp.main import main

main()
